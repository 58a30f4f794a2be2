"""
views/navigation.py — Top bar: guest links or the profile menu.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text


def render_navigation(state: dict) -> Panel:
    user = state["session"]["user"]

    bar = Text()
    bar.append("Discover Cafes", style="bold cyan")
    bar.append("  ·  ")
    bar.append("Add A Cafe", style="cyan")
    bar.append("  ·  ")

    if user:
        bar.append(f"{user['username']}", style="bold green")
        bar.append(f" <{user['email']}>", style="dim")
        bar.append("  ·  ")
        bar.append("Log Out", style="magenta")
    else:
        bar.append("Log In", style="magenta")
        bar.append("  ·  ")
        bar.append("Sign Up", style="magenta")

    return Panel(bar, title="Cafe Directory", title_align="left")
