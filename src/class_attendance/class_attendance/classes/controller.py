from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, login_required, ok, parse_date_value, parse_int_value
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.daily_class_service

    @app.route("/api/classes", methods=["GET"], endpoint="classes_for_date")
    @login_required
    def classes_for_date():
        class_date = parse_date_value(request.args.get("date"))
        return ok({"classes": [c.to_dict() for c in service.list_for_date(class_date)]})

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @login_required
    def classes_create():
        data = json_body()
        created = service.create(
            class_date=parse_date_value(data.get("date")),
            time_slot_id=parse_int_value(data.get("slot_id"), "Time slot"),
            class_name=data.get("class_name"),
        )
        return ok({"class": created.to_dict()}, 201)

    @app.route("/api/classes/<int:class_id>", methods=["PUT"], endpoint="classes_rename")
    @login_required
    def classes_rename(class_id: int):
        renamed = service.rename(class_id, class_name=json_body().get("class_name"))
        return ok({"class": renamed.to_dict()})

    @app.route("/api/classes/schedule", methods=["POST"], endpoint="classes_schedule")
    @login_required
    def classes_schedule():
        data = json_body()
        class_date = parse_date_value(data.get("date"))
        raw_names = data.get("names") or {}
        if not isinstance(raw_names, dict):
            raise ValidationError("names must map time slot ids to class names")

        names = {}
        for key, value in raw_names.items():
            names[parse_int_value(key, "Time slot")] = None if value is None else str(value)

        result = service.save_day_schedule(class_date=class_date, names=names)
        result.raise_for_failures()
        return ok({"result": result.to_dict()})
