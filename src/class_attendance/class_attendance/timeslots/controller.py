from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, login_required, ok, parse_bool_value
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.time_slot_service

    @app.route("/api/time-slots", methods=["GET"], endpoint="time_slots_list")
    @login_required
    def time_slots_list():
        active_only = parse_bool_value(request.args.get("active", ""))
        slots = service.list_active() if active_only else service.list_all()
        return ok({"time_slots": [s.to_dict() for s in slots]})

    @app.route("/api/time-slots", methods=["POST"], endpoint="time_slots_add")
    @login_required
    def time_slots_add():
        data = json_body()
        slot_id = service.add(slot_time=data.get("time"), label=data.get("label"))
        return ok({"time_slot": service.get(slot_id).to_dict()}, 201)

    @app.route("/api/time-slots/<int:slot_id>/toggle", methods=["POST"], endpoint="time_slots_toggle")
    @login_required
    def time_slots_toggle(slot_id: int):
        is_active = service.toggle_active(slot_id)
        return ok({"is_active": is_active})

    @app.route("/api/time-slots/<int:slot_id>", methods=["DELETE"], endpoint="time_slots_delete")
    @login_required
    def time_slots_delete(slot_id: int):
        service.delete(slot_id)
        return ok({"message": "Time slot deleted"})
