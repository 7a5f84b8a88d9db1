from __future__ import annotations

from flask import Blueprint, Response, current_app, session

from app.blueprints.api._common import fail, get_json, success
from app.schemas import LoginRequest, RegisterRequest
from app.security.auth import api_login_required, current_user_id
from app.utils.http import safe_route

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
@safe_route("Registration failed")
def register() -> Response:
    container = current_app.config["CONTAINER"]
    body = RegisterRequest(**get_json())

    user_id = container.auth_manager.register_user(body.username, body.password, body.email)
    if user_id is None:
        return fail("Could not create the account. Please try again.", 500)

    return success({"id": user_id, "username": body.username}, 201, message="Registration successful")


@auth_bp.post("/login")
@safe_route("Login failed")
def login() -> Response:
    container = current_app.config["CONTAINER"]
    body = LoginRequest(**get_json())

    user = container.auth_manager.authenticate_user(body.username, body.password)
    if not user:
        return fail("Invalid username or password.", 401)

    # Security: Regenerate session to prevent session fixation attacks
    session.clear()
    session["user"] = user["username"]
    session["user_id"] = user["id"]
    session.permanent = True

    return success({"id": user["id"], "username": user["username"]}, message="Logged in successfully")


@auth_bp.post("/logout")
def logout() -> Response:
    user_id = current_user_id()
    session.clear()
    if user_id is not None:
        current_app.config["CONTAINER"].auth_manager.record_logout(user_id)
    return success(None, message="You have been logged out.")


@auth_bp.get("/me")
@api_login_required
@safe_route("Failed to load account")
def me() -> Response:
    container = current_app.config["CONTAINER"]
    user = container.auth_manager.get_user(current_user_id())
    if not user:
        session.clear()
        return fail("Authentication required", 401)
    return success(user)
