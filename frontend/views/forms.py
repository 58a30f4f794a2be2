"""
views/forms.py — Form field lists, client-side required checks, and the
inline error list shown under a failed form.
"""

from __future__ import annotations

from rich.text import Text

# (wire key, label)
CAFE_FIELDS = (
    ("title", "Title"),
    ("description", "Description"),
    ("img", "Image URL"),
    ("address", "Address"),
    ("city", "City"),
    ("zipCode", "Zip code"),
)
LOGIN_FIELDS = (("credential", "Username or Email"), ("password", "Password"))
SIGNUP_FIELDS = (("username", "Username"), ("email", "Email"), ("password", "Password"))
REVIEW_FIELDS = (("answer", "Review"),)


def missing_fields(data: dict, fields) -> list[str]:
    """One message per required field that is absent or blank."""
    errors = []
    for key, label in fields:
        value = data.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{label} is required.")
    return errors


def render_errors(errors: list[str]) -> Text:
    text = Text()
    for i, message in enumerate(errors):
        if i:
            text.append("\n")
        text.append("• ", style="red")
        text.append(message, style="red")
    return text


def render_login_required() -> Text:
    return Text("Please log in to continue.", style="bold yellow")
