"""
csrf.py — HTTP wrapper for the Cafe Directory API.

Every request from the client goes through CsrfFetch so that:
  - cookies (token, XSRF-TOKEN, Flask session) persist across calls
  - non-GET requests carry the XSRF-TOKEN cookie value as X-CSRF-Token
  - non-2xx responses raise ApiError instead of returning quietly

The CSRF cookie is fetched lazily from GET /api/csrf/restore the first time
a mutating request is made without one.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "XSRF-TOKEN"
CSRF_HEADER_NAME = "X-CSRF-Token"
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class ApiError(Exception):
    """A non-2xx response. `errors` is the list the API sent back."""

    def __init__(
            self,
            status: int,
            title: str,
            errors: list[str] | None = None,
            fields: dict | None = None,
            code: str | None = None,
    ) -> None:
        super().__init__(title)
        self.status = status
        self.title  = title
        self.errors = list(errors) if errors else [title]
        self.fields = fields or {}
        self.code   = code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status=response.status_code,
            title=body.get("title") or response.reason_phrase or "Request failed",
            errors=body.get("errors"),
            fields=body.get("fields"),
            code=body.get("code"),
        )

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, title={self.title!r})"


class CsrfFetch:
    """
    Thin wrapper around httpx.Client.

    Args:
        base_url:  API origin, e.g. "http://localhost:5000".
        transport: Optional httpx transport (httpx.WSGITransport in tests).
        cookies:   Optional list of {"name", "value", "domain", "path"} dicts
                   restored from a previous run.
    """

    def __init__(
            self,
            base_url: str = "http://localhost:5000",
            transport: httpx.BaseTransport | None = None,
            cookies: list[dict] | None = None,
            timeout: float = 10.0,
    ) -> None:
        self.client = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)
        for cookie in cookies or []:
            self.client.cookies.set(
                cookie["name"],
                cookie["value"],
                domain=cookie.get("domain", ""),
                path=cookie.get("path", "/"),
            )

    # ── Cookies ────────────────────────────────────────────────────────────

    def csrf_token(self) -> str | None:
        for cookie in self.client.cookies.jar:
            if cookie.name == CSRF_COOKIE_NAME:
                return cookie.value
        return None

    def export_cookies(self) -> list[dict]:
        """Cookie jar as plain dicts, for the CLI's cookie file."""
        return [
            {
                "name": cookie.name,
                "value": cookie.value,
                "domain": cookie.domain,
                "path": cookie.path,
            }
            for cookie in self.client.cookies.jar
        ]

    def restore_csrf(self) -> str:
        """GET /api/csrf/restore — sets the XSRF-TOKEN cookie."""
        data = self.request("GET", "/api/csrf/restore")
        return data["XSRF-Token"]

    # ── Requests ───────────────────────────────────────────────────────────

    def request(self, method: str, path: str, json: dict | None = None) -> dict | None:
        """
        Sends one request and returns the decoded JSON body (None for 204).

        Raises:
          ApiError — any non-2xx status
        """
        method = method.upper()
        headers = {}
        if method not in SAFE_METHODS:
            token = self.csrf_token() or self.restore_csrf()
            headers[CSRF_HEADER_NAME] = token

        logger.debug("%s %s", method, path)
        response = self.client.request(method, path, json=json, headers=headers)
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.is_success:
            raise ApiError.from_response(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get(self, path: str) -> dict | None:
        return self.request("GET", path)

    def post(self, path: str, json: dict | None = None) -> dict | None:
        return self.request("POST", path, json=json or {})

    def put(self, path: str, json: dict | None = None) -> dict | None:
        return self.request("PUT", path, json=json or {})

    def delete(self, path: str) -> dict | None:
        return self.request("DELETE", path)

    def close(self) -> None:
        self.client.close()
