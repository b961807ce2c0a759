from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import current_user_id, json_body, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    def _start_session(user_id: str, name: str, role: Role) -> None:
        session.clear()
        session.permanent = True
        session["user_id"] = user_id
        session["name"] = name
        session["role"] = role.value

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_user():
        data = json_body()
        role_s = data.get("role") or Role.INTERN.value
        try:
            role = Role(role_s)
        except ValueError:
            raise ValidationError("Role must be ADMIN or INTERN") from None
        if role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created by self-registration")

        user = container.auth_service.register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=role,
            department=data.get("department"),
        )
        _start_session(user.user_id, user.name, user.role)
        return jsonify({"message": "User registered successfully", "user": user.to_public_dict()}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        _start_session(s_user.user_id, s_user.name, s_user.role)

        user = container.auth_service.get_profile(s_user.user_id)
        return jsonify({"message": "Login successful", "user": user.to_public_dict()}), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"}), 200

    @app.route("/api/auth/profile", methods=["GET"], endpoint="profile")
    @login_required
    def profile():
        user = container.auth_service.get_profile(current_user_id())
        return jsonify({"user": user.to_public_dict()})

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="update_profile")
    @login_required
    def update_profile():
        data = json_body()
        user = container.auth_service.update_profile(
            current_user_id(),
            name=data.get("name"),
            department=data.get("department"),
            avatar=data.get("avatar"),
        )
        session["name"] = user.name
        return jsonify({"message": "Profile updated successfully", "user": user.to_public_dict()})
