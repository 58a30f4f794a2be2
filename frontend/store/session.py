"""
store/session.py — Session slice: who is logged in.
"""

from __future__ import annotations

SET_USER = "session/setUser"
REMOVE_USER = "session/removeUser"

INITIAL_STATE = {"user": None}


# ── Actions ────────────────────────────────────────────────────────────────

def set_user(user: dict | None) -> dict:
    return {"type": SET_USER, "payload": user}


def remove_user() -> dict:
    return {"type": REMOVE_USER}


# ── Thunks ─────────────────────────────────────────────────────────────────

def restore_user():
    """GET /api/session — load the user behind the current token cookie."""
    def thunk(dispatch, get_state, fetch):
        data = fetch.get("/api/session")
        dispatch(set_user(data["user"]))
        return data["user"]
    return thunk


def login(credential: str, password: str):
    def thunk(dispatch, get_state, fetch):
        data = fetch.post("/api/session", {"credential": credential, "password": password})
        dispatch(set_user(data["user"]))
        return data["user"]
    return thunk


def signup(username: str, email: str, password: str):
    def thunk(dispatch, get_state, fetch):
        data = fetch.post(
            "/api/users",
            {"username": username, "email": email, "password": password},
        )
        dispatch(set_user(data["user"]))
        return data["user"]
    return thunk


def logout():
    def thunk(dispatch, get_state, fetch):
        fetch.delete("/api/session")
        dispatch(remove_user())
    return thunk


# ── Reducer ────────────────────────────────────────────────────────────────

def session_reducer(state: dict | None, action: dict) -> dict:
    if state is None:
        state = INITIAL_STATE

    if action["type"] == SET_USER:
        return {**state, "user": action["payload"]}
    if action["type"] == REMOVE_USER:
        return {**state, "user": None}
    return state
