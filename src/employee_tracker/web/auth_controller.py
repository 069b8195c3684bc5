from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import AuthenticationError
from ..container import Container
from ..users.session import LOGIN_ROUTE


def register(app: Flask, container: Container) -> None:
    session = container.session

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        email = data.get("email", "")
        password = data.get("password", "")

        if not session.login(email, password):
            raise AuthenticationError(session.error or "Login failed")

        return jsonify(
            {
                "success": True,
                "user": session.current_user.public_dict(),
                "route": session.home_route(),
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.logout()
        return jsonify({"success": True, "route": LOGIN_ROUTE})

    @app.route("/session", methods=["GET"], endpoint="current_session")
    def current_session():
        user = session.current_user
        return jsonify(
            {
                "user": user.public_dict() if user else None,
                "route": session.home_route(),
                "error": session.error,
            }
        )
