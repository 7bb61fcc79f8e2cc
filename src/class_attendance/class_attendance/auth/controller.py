from __future__ import annotations

from flask import Flask

from ..common.http import current_session, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        current_session().sign_in(
            container.auth_service,
            str(data.get("username") or "").strip(),
            str(data.get("password") or ""),
        )
        return ok({"message": "Signed in"})

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        current_session().sign_out()
        return ok({"message": "Signed out"})

    @app.route("/api/session", methods=["GET"], endpoint="api_session")
    def session_state():
        return ok({"authenticated": current_session().is_authenticated})
