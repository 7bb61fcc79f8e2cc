from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, login_required, ok, parse_bool_value
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.personnel_service

    @app.route("/api/personnel", methods=["GET"], endpoint="personnel_list")
    @login_required
    def personnel_list():
        if parse_bool_value(request.args.get("active", "")):
            people = service.list_active()
        else:
            people = service.list_all(
                search=request.args.get("search", ""),
                category=request.args.get("category"),
            )
        return ok({"personnel": [p.to_dict() for p in people]})

    @app.route("/api/personnel", methods=["POST"], endpoint="personnel_create")
    @login_required
    def personnel_create():
        data = json_body()
        personnel_id = service.create(
            employee_id=data.get("employee_id"),
            name=data.get("name"),
            category=data.get("category"),
            sub_category=data.get("sub_category"),
        )
        return ok({"personnel": service.get(personnel_id).to_dict()}, 201)

    @app.route("/api/personnel/<int:personnel_id>", methods=["PUT"], endpoint="personnel_update")
    @login_required
    def personnel_update(personnel_id: int):
        data = json_body()
        service.update(
            personnel_id,
            employee_id=data.get("employee_id"),
            name=data.get("name"),
            category=data.get("category"),
            sub_category=data.get("sub_category"),
        )
        return ok({"personnel": service.get(personnel_id).to_dict()})

    @app.route("/api/personnel/<int:personnel_id>/active", methods=["POST"], endpoint="personnel_set_active")
    @login_required
    def personnel_set_active(personnel_id: int):
        service.set_active(personnel_id, is_active=parse_bool_value(json_body().get("is_active", False)))
        return ok({"personnel": service.get(personnel_id).to_dict()})

    @app.route("/api/personnel/<int:personnel_id>", methods=["DELETE"], endpoint="personnel_delete")
    @login_required
    def personnel_delete(personnel_id: int):
        service.delete(personnel_id)
        return ok({"message": "Personnel deleted"})
