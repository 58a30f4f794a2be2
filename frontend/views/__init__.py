"""
views/ — rich renderables built from Store state.

Views never call the API themselves; the CLI dispatches thunks and then
renders the resulting state.
"""

from frontend.views.cafes import render_cafe_detail, render_cafe_list
from frontend.views.forms import (
    CAFE_FIELDS,
    LOGIN_FIELDS,
    SIGNUP_FIELDS,
    missing_fields,
    render_errors,
    render_login_required,
)
from frontend.views.navigation import render_navigation

__all__ = [
    "CAFE_FIELDS",
    "LOGIN_FIELDS",
    "SIGNUP_FIELDS",
    "missing_fields",
    "render_cafe_detail",
    "render_cafe_list",
    "render_errors",
    "render_login_required",
    "render_navigation",
]
