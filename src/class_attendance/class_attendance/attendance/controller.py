from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, login_required, ok, parse_date_value, parse_int_value
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def open_workflow(data):
        workflow = container.new_marking_workflow()
        workflow.load_roster()
        workflow.select(
            parse_date_value(data.get("date")),
            parse_int_value(data.get("slot_id"), "Time slot"),
        )
        return workflow

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_load")
    @login_required
    def attendance_load():
        workflow = open_workflow(request.args)
        return ok({"attendance": workflow.to_dict()})

    @app.route("/api/attendance/class", methods=["POST"], endpoint="attendance_create_class")
    @login_required
    def attendance_create_class():
        data = json_body()
        workflow = open_workflow(data)
        workflow.create_class(data.get("class_name"))
        return ok({"attendance": workflow.to_dict()}, 201)

    @app.route("/api/attendance/save", methods=["POST"], endpoint="attendance_save")
    @login_required
    def attendance_save():
        data = json_body()
        workflow = open_workflow(data)

        mark_all = data.get("mark_all")
        if mark_all == "present":
            workflow.mark_all_present()
        elif mark_all == "absent":
            workflow.mark_all_absent()
        elif mark_all:
            raise ValidationError("mark_all must be 'present' or 'absent'")
        else:
            present_ids = data.get("present_ids") or []
            if not isinstance(present_ids, list):
                raise ValidationError("present_ids must be a list")
            workflow.set_present(parse_int_value(i, "Personnel") for i in present_ids)

        result = workflow.save()
        return ok({"result": result.to_dict(), "attendance": workflow.to_dict()})
