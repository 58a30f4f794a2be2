"""
store/cafes.py — Cafe slice, normalized as {cafe_id: cafe}.

Action types:
  cafes/addCafes        replace the whole map with a fetched list
  cafes/addOneCafe      insert a created cafe
  cafes/updateOneCafe   replace one cafe
  cafes/getOne          merge a fetched cafe into any existing entry
  cafes/removeOneCafe   drop one cafe
"""

from __future__ import annotations

from frontend.store.reviews import prune_cafe

ADD_CAFES = "cafes/addCafes"
ADD_ONE_CAFE = "cafes/addOneCafe"
UPDATE_ONE_CAFE = "cafes/updateOneCafe"
GET_ONE = "cafes/getOne"
REMOVE_ONE_CAFE = "cafes/removeOneCafe"


# ── Actions ────────────────────────────────────────────────────────────────

def add_cafes(cafes: list[dict]) -> dict:
    return {"type": ADD_CAFES, "payload": cafes}


def add_one_cafe(cafe: dict) -> dict:
    return {"type": ADD_ONE_CAFE, "payload": cafe}


def update_one_cafe(cafe: dict) -> dict:
    return {"type": UPDATE_ONE_CAFE, "payload": cafe}


def get_one(cafe: dict) -> dict:
    return {"type": GET_ONE, "payload": cafe}


def remove_one_cafe(cafe_id: int) -> dict:
    return {"type": REMOVE_ONE_CAFE, "payload": cafe_id}


# ── Thunks ─────────────────────────────────────────────────────────────────
# Each thunk raises ApiError on a non-2xx response; the slice is only
# touched after a successful call.

def get_all_cafes():
    def thunk(dispatch, get_state, fetch):
        data = fetch.get("/api/cafes")
        dispatch(add_cafes(data["cafe"]))
        return data["cafe"]
    return thunk


def get_one_cafe(cafe_id: int):
    def thunk(dispatch, get_state, fetch):
        data = fetch.get(f"/api/cafes/{cafe_id}")
        dispatch(get_one(data["cafe"]))
        return data["cafe"]
    return thunk


def add_cafe(cafe: dict):
    def thunk(dispatch, get_state, fetch):
        created = fetch.post("/api/cafes/new", cafe)
        dispatch(add_one_cafe(created))
        return created
    return thunk


def update_cafe(cafe: dict):
    """`cafe` must carry its id; any other keys are sent as the update."""
    def thunk(dispatch, get_state, fetch):
        data = fetch.put(f"/api/cafes/{cafe['id']}", cafe)
        dispatch(update_one_cafe(data["cafe"]))
        return data["cafe"]
    return thunk


def delete_cafe(cafe_id: int):
    def thunk(dispatch, get_state, fetch):
        fetch.delete(f"/api/cafes/{cafe_id}")
        dispatch(remove_one_cafe(cafe_id))
        dispatch(prune_cafe(cafe_id))
    return thunk


# ── Reducer ────────────────────────────────────────────────────────────────

def cafes_reducer(state: dict | None, action: dict) -> dict:
    if state is None:
        state = {}

    kind = action["type"]
    payload = action.get("payload")

    if kind == ADD_CAFES:
        return {cafe["id"]: cafe for cafe in payload}

    if kind in (ADD_ONE_CAFE, UPDATE_ONE_CAFE):
        return {**state, payload["id"]: payload}

    if kind == GET_ONE:
        merged = {**state.get(payload["id"], {}), **payload}
        return {**state, payload["id"]: merged}

    if kind == REMOVE_ONE_CAFE:
        new_state = dict(state)
        new_state.pop(payload, None)
        return new_state

    return state
