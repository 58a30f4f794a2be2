"""
views/cafes.py — Cafe list and cafe detail (with its reviews inline).
"""

from __future__ import annotations

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from frontend.store.reviews import reviews_for_cafe


def _sorted_cafes(state: dict) -> list[dict]:
    return sorted(
        state["cafes"].values(),
        key=lambda c: (c["createdAt"], c["id"]),
        reverse=True,
    )


def render_cafe_list(state: dict) -> Table | Text:
    cafes = _sorted_cafes(state)
    if not cafes:
        return Text("No cafes yet.", style="dim")

    table = Table(box=box.SIMPLE_HEAVY, title="Cafes")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("City")
    table.add_column("Owner", style="green")

    for cafe in cafes:
        owner = (cafe.get("owner") or {}).get("username", str(cafe["ownerId"]))
        table.add_row(str(cafe["id"]), cafe["title"], cafe["city"], owner)
    return table


def render_review_list(state: dict, cafe_id: int) -> Table | Text:
    reviews = reviews_for_cafe(state, cafe_id)
    if not reviews:
        return Text("No reviews yet.", style="dim")

    user = state["session"]["user"]
    table = Table(box=box.MINIMAL, show_header=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Author", style="green")
    table.add_column("Review")
    table.add_column("")

    for review in reviews:
        author = (review.get("author") or {}).get("username", str(review["userId"]))
        own = bool(user) and user["id"] == review["userId"]
        table.add_row(
            str(review["id"]),
            author,
            review["answer"],
            Text("delete", style="red") if own else "",
        )
    return table


def render_cafe_detail(state: dict, cafe_id: int) -> Panel | Text:
    cafe = state["cafes"].get(cafe_id)
    if cafe is None:
        return Text(f"Cafe {cafe_id} is not loaded.", style="red")

    user = state["session"]["user"]
    lines = Text()
    lines.append(cafe["description"] + "\n\n")
    lines.append(f"{cafe['address']}, {cafe['city']} {cafe['zipCode']}\n", style="bold")
    lines.append(cafe["img"], style="dim underline")
    if user and user["id"] == cafe["ownerId"]:
        lines.append("\n\nedit · delete", style="magenta")

    body = Group(
        lines,
        Text("\nReviews", style="bold"),
        render_review_list(state, cafe_id),
    )
    return Panel(body, title=f"#{cafe['id']} {cafe['title']}", title_align="left")
