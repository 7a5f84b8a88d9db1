from functools import wraps
from typing import Callable, TypeVar, cast

from flask import session

from app.utils.http import error_response

F = TypeVar("F", bound=Callable[..., object])


def api_login_required(view_func: F) -> F:
    """Ensure the user is authenticated for API endpoints (returns JSON 401)."""

    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if current_user_id() is None:
            return error_response(
                "Authentication required",
                status=401,
                details={"code": "UNAUTHORIZED"},
            )
        return view_func(*args, **kwargs)

    return cast(F, wrapped)


def current_user_id() -> int | None:
    user_id = session.get("user_id")
    return int(user_id) if user_id is not None else None
