from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import to_iso_date, today_local
from ..common.http import login_required, ok, parse_date_value
from ..container import Container
from .export import date_wise_csv, person_history_csv


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def csv_response(body: bytes, filename: str):
        return app.response_class(
            body,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/reports/date", methods=["GET"], endpoint="report_date_wise")
    @login_required
    def report_date_wise():
        pivot = reports.date_wise(parse_date_value(request.args.get("date")))
        return ok({"report": pivot.to_dict()})

    @app.route("/api/reports/person/<int:personnel_id>", methods=["GET"], endpoint="report_person_wise")
    @login_required
    def report_person_wise(personnel_id: int):
        return ok({"report": reports.person_wise(personnel_id).to_dict()})

    @app.route("/api/reports/slot/<int:slot_id>", methods=["GET"], endpoint="report_slot_wise")
    @login_required
    def report_slot_wise(slot_id: int):
        return ok({"report": reports.slot_wise(slot_id).to_dict()})

    @app.route("/api/reports/class", methods=["GET"], endpoint="report_class_search")
    @login_required
    def report_class_search():
        return ok({"report": reports.class_search(request.args.get("q")).to_dict()})

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="report_dashboard")
    @login_required
    def report_dashboard():
        return ok({"report": reports.dashboard(today_local()).to_dict()})

    @app.route("/api/reports/date.csv", methods=["GET"], endpoint="report_date_wise_csv")
    @login_required
    def report_date_wise_csv():
        class_date = parse_date_value(request.args.get("date"))
        pivot = reports.date_wise(class_date)
        return csv_response(date_wise_csv(pivot), f"attendance_{to_iso_date(class_date)}.csv")

    @app.route("/api/reports/person/<int:personnel_id>.csv", methods=["GET"], endpoint="report_person_wise_csv")
    @login_required
    def report_person_wise_csv(personnel_id: int):
        history = reports.person_wise(personnel_id)
        return csv_response(person_history_csv(history), f"attendance_personnel_{personnel_id}.csv")
