"""
store/reviews.py — Review slice, normalized as {review_id: review}.

Action types:
  comments/addComments      replace the reviews of ONE cafe; other cafes'
                            reviews are kept
  comments/addOneComment    insert a created review
  comments/removeOneComment drop one review
  comments/pruneCafe        drop every review of a deleted cafe
"""

from __future__ import annotations

ADD_COMMENTS = "comments/addComments"
ADD_ONE_COMMENT = "comments/addOneComment"
REMOVE_ONE_COMMENT = "comments/removeOneComment"
PRUNE_CAFE = "comments/pruneCafe"


# ── Actions ────────────────────────────────────────────────────────────────

def add_comments(cafe_id: int, answers: list[dict]) -> dict:
    return {"type": ADD_COMMENTS, "payload": {"businessId": cafe_id, "answers": answers}}


def add_one_comment(review: dict) -> dict:
    return {"type": ADD_ONE_COMMENT, "payload": review}


def remove_one_comment(review_id: int) -> dict:
    return {"type": REMOVE_ONE_COMMENT, "payload": review_id}


def prune_cafe(cafe_id: int) -> dict:
    return {"type": PRUNE_CAFE, "payload": cafe_id}


# ── Thunks ─────────────────────────────────────────────────────────────────

def get_all_comments(cafe_id: int):
    """Reviews of one cafe."""
    def thunk(dispatch, get_state, fetch):
        data = fetch.get(f"/api/reviews/cafes/{cafe_id}")
        dispatch(add_comments(cafe_id, data["answers"]))
        return data["answers"]
    return thunk


def add_comment(cafe_id: int, answer: str):
    def thunk(dispatch, get_state, fetch):
        created = fetch.post("/api/reviews/new", {"businessId": cafe_id, "answer": answer})
        dispatch(add_one_comment(created))
        return created
    return thunk


def delete_comment(review_id: int):
    def thunk(dispatch, get_state, fetch):
        fetch.delete(f"/api/reviews/{review_id}")
        dispatch(remove_one_comment(review_id))
    return thunk


# ── Selectors ──────────────────────────────────────────────────────────────

def reviews_for_cafe(state: dict, cafe_id: int) -> list[dict]:
    """Reviews of `cafe_id` from the full store state, newest first."""
    reviews = [r for r in state["reviews"].values() if r["businessId"] == cafe_id]
    return sorted(reviews, key=lambda r: (r["createdAt"], r["id"]), reverse=True)


# ── Reducer ────────────────────────────────────────────────────────────────

def _without_cafe(state: dict, cafe_id: int) -> dict:
    return {rid: r for rid, r in state.items() if r["businessId"] != cafe_id}


def reviews_reducer(state: dict | None, action: dict) -> dict:
    if state is None:
        state = {}

    kind = action["type"]
    payload = action.get("payload")

    if kind == ADD_COMMENTS:
        new_state = _without_cafe(state, payload["businessId"])
        new_state.update({review["id"]: review for review in payload["answers"]})
        return new_state

    if kind == ADD_ONE_COMMENT:
        return {**state, payload["id"]: payload}

    if kind == REMOVE_ONE_COMMENT:
        new_state = dict(state)
        new_state.pop(payload, None)
        return new_state

    if kind == PRUNE_CAFE:
        return _without_cafe(state, payload)

    return state
