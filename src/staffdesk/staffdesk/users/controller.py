from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..core.exceptions import AuthenticationError
from ..web.guards import current_principal, json_body, login_required
from .model import User

logger = logging.getLogger(__name__)


def user_json(user: User) -> dict:
    return to_json(user, exclude=("password_hash",))


def _start_session(user: User) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = user.id


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_account():
        user = container.auth_service.register(json_body())
        _start_session(user)
        return jsonify(user_json(user)), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = json_body() or {}
        user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        _start_session(user)
        logger.info("user %s logged in", user.id)
        return jsonify(user_json(user))

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        container.auth_service.logout(current_principal())
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/user", methods=["GET"], endpoint="current_user")
    @login_required
    def current_user():
        user = container.auth_service.get_user(current_principal().user_id)
        if user is None:
            raise AuthenticationError("Unauthorized")
        return jsonify(user_json(user))

    @app.route("/api/user", methods=["PUT"], endpoint="update_profile")
    @login_required
    def update_profile():
        return jsonify(user_json(container.auth_service.update_profile(current_principal(), json_body())))

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        users = container.user_service.list_users(current_principal())
        return jsonify(to_json_list(users, exclude=("password_hash",)))

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @login_required
    def create_user():
        return jsonify(user_json(container.user_service.create_user(current_principal(), json_body()))), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @login_required
    def update_user(user_id: int):
        return jsonify(user_json(container.user_service.update_user(current_principal(), user_id, json_body())))
