"""
cli.py — `cafe-directory` terminal client.

Usage:
  cafe-directory signup alice alice@example.com
  cafe-directory login alice
  cafe-directory cafes
  cafe-directory cafe 3
  cafe-directory add-cafe --title "Blue Bottle" --description ... --img ...
                          --address ... --city ... --zip-code 10011
  cafe-directory edit-cafe 3 --city Brooklyn
  cafe-directory delete-cafe 3
  cafe-directory review 3 "Great flat white."
  cafe-directory delete-review 12
  cafe-directory logout

Cookies (session token, CSRF token) persist between runs in a JSON file,
~/.cafe-directory/cookies.json unless --cookie-file says otherwise.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path

import httpx
from rich.console import Console
from rich.logging import RichHandler

from frontend.csrf import ApiError, CsrfFetch
from frontend.store import Store, configure_store
from frontend.store import cafes as cafe_actions
from frontend.store import reviews as review_actions
from frontend.store import session as session_actions
from frontend.views import (
    CAFE_FIELDS,
    LOGIN_FIELDS,
    SIGNUP_FIELDS,
    missing_fields,
    render_cafe_detail,
    render_cafe_list,
    render_errors,
    render_login_required,
    render_navigation,
)
from frontend.views.forms import REVIEW_FIELDS

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_COOKIE_FILE = Path.home() / ".cafe-directory" / "cookies.json"

PROTECTED = {"add-cafe", "edit-cafe", "delete-cafe", "review", "delete-review"}


# ═══════════════════════════════════════════════════════════════════════════
#  Cookie file
# ═══════════════════════════════════════════════════════════════════════════

def load_cookies(path: Path) -> list[dict]:
    if not path.exists():
        return []
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable cookie file %s: %s", path, e)
        return []


def save_cookies(path: Path, cookies: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cookies, indent=2), encoding="utf-8")


# ═══════════════════════════════════════════════════════════════════════════
#  Argument parsing
# ═══════════════════════════════════════════════════════════════════════════

def _add_cafe_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title")
    parser.add_argument("--description")
    parser.add_argument("--img", help="Image URL")
    parser.add_argument("--address")
    parser.add_argument("--city")
    parser.add_argument("--zip-code", dest="zip_code")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cafe-directory",
        description="cafe-directory — browse and review cafes",
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("CAFE_DIRECTORY_URL", DEFAULT_BASE_URL),
        help=f"API origin (default: $CAFE_DIRECTORY_URL or {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--cookie-file",
        type=Path,
        default=DEFAULT_COOKIE_FILE,
        help="Where session cookies are kept between runs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP traffic")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("signup", help="Create an account and log in")
    p.add_argument("username")
    p.add_argument("email")
    p.add_argument("--password")

    p = sub.add_parser("login", help="Log in with username or e-mail")
    p.add_argument("credential")
    p.add_argument("--password")

    sub.add_parser("logout", help="End the session")
    sub.add_parser("whoami", help="Show the navigation bar for the current session")
    sub.add_parser("cafes", help="List every cafe")

    p = sub.add_parser("cafe", help="Show one cafe and its reviews")
    p.add_argument("cafe_id", type=int)

    p = sub.add_parser("add-cafe", help="Create a cafe")
    _add_cafe_fields(p)

    p = sub.add_parser("edit-cafe", help="Update fields of a cafe you own")
    p.add_argument("cafe_id", type=int)
    _add_cafe_fields(p)

    p = sub.add_parser("delete-cafe", help="Delete a cafe you own")
    p.add_argument("cafe_id", type=int)

    p = sub.add_parser("review", help="Review a cafe")
    p.add_argument("cafe_id", type=int)
    p.add_argument("answer")

    p = sub.add_parser("delete-review", help="Delete one of your reviews")
    p.add_argument("review_id", type=int)

    return parser


def _cafe_form(args: argparse.Namespace) -> dict:
    return {
        "title": args.title,
        "description": args.description,
        "img": args.img,
        "address": args.address,
        "city": args.city,
        "zipCode": args.zip_code,
    }


# ═══════════════════════════════════════════════════════════════════════════
#  Commands
# ═══════════════════════════════════════════════════════════════════════════

def _show_cafe(store: Store, console: Console, cafe_id: int) -> None:
    store.dispatch(cafe_actions.get_one_cafe(cafe_id))
    store.dispatch(review_actions.get_all_comments(cafe_id))
    console.print(render_cafe_detail(store.get_state(), cafe_id))


def run(args: argparse.Namespace, store: Store, console: Console) -> int:
    """
    Executes one parsed command against `store`.

    Returns the process exit code: 0 on success, 1 when the API or a
    client-side check rejected the command, or the server was unreachable.
    """
    command = args.command

    try:
        store.dispatch(session_actions.restore_user())

        if command in PROTECTED and store.get_state()["session"]["user"] is None:
            console.print(render_login_required())
            return 1

        if command == "signup":
            form = {
                "username": args.username,
                "email": args.email,
                "password": args.password or getpass.getpass("Password: "),
            }
            errors = missing_fields(form, SIGNUP_FIELDS)
            if errors:
                console.print(render_errors(errors))
                return 1
            store.dispatch(session_actions.signup(**form))
            console.print(render_navigation(store.get_state()))

        elif command == "login":
            form = {
                "credential": args.credential,
                "password": args.password or getpass.getpass("Password: "),
            }
            errors = missing_fields(form, LOGIN_FIELDS)
            if errors:
                console.print(render_errors(errors))
                return 1
            store.dispatch(session_actions.login(**form))
            console.print(render_navigation(store.get_state()))

        elif command == "logout":
            store.dispatch(session_actions.logout())
            console.print(render_navigation(store.get_state()))

        elif command == "whoami":
            console.print(render_navigation(store.get_state()))

        elif command == "cafes":
            store.dispatch(cafe_actions.get_all_cafes())
            console.print(render_cafe_list(store.get_state()))

        elif command == "cafe":
            _show_cafe(store, console, args.cafe_id)

        elif command == "add-cafe":
            form = _cafe_form(args)
            errors = missing_fields(form, CAFE_FIELDS)
            if errors:
                console.print(render_errors(errors))
                return 1
            created = store.dispatch(cafe_actions.add_cafe(form))
            console.print(render_cafe_detail(store.get_state(), created["id"]))

        elif command == "edit-cafe":
            changes = {k: v for k, v in _cafe_form(args).items() if v is not None}
            if not changes:
                console.print(render_errors(["Nothing to update."]))
                return 1
            store.dispatch(cafe_actions.update_cafe({"id": args.cafe_id, **changes}))
            _show_cafe(store, console, args.cafe_id)

        elif command == "delete-cafe":
            store.dispatch(cafe_actions.delete_cafe(args.cafe_id))
            console.print(f"Deleted cafe {args.cafe_id}.")

        elif command == "review":
            errors = missing_fields({"answer": args.answer}, REVIEW_FIELDS)
            if errors:
                console.print(render_errors(errors))
                return 1
            store.dispatch(review_actions.add_comment(args.cafe_id, args.answer))
            _show_cafe(store, console, args.cafe_id)

        elif command == "delete-review":
            store.dispatch(review_actions.delete_comment(args.review_id))
            console.print(f"Deleted review {args.review_id}.")

    except ApiError as e:
        logger.debug("%r", e)
        console.print(f"[bold red]{e.title}[/bold red]")
        if e.status == 401 and command in PROTECTED:
            console.print(render_login_required())
        else:
            console.print(render_errors(e.errors))
        return 1

    except httpx.HTTPError as e:
        logger.debug("transport error: %r", e)
        console.print("[bold red]Could not reach the server[/bold red]")
        console.print(render_errors([f"{type(e).__name__}: {e}"]))
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )

    fetch = CsrfFetch(args.base_url, cookies=load_cookies(args.cookie_file))
    store = configure_store(fetch)
    console = Console()

    try:
        return run(args, store, console)
    finally:
        save_cookies(args.cookie_file, fetch.export_cookies())
        fetch.close()


if __name__ == "__main__":
    sys.exit(main())
