from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import date_arg, date_field, json_body, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/<user_id>/check-in", methods=["POST"], endpoint="attendance_check_in")
    def check_in(user_id: str):
        body = json_body()
        if body.get("time"):
            day = date_field(body, "date", default=now_local().date())
            entry = service.update_check_in_out(user_id, day, check_in=str(body["time"]))
        else:
            entry = service.check_in(user_id)
        return jsonify(to_jsonable(entry))

    @app.route("/api/attendance/<user_id>/check-out", methods=["POST"], endpoint="attendance_check_out")
    def check_out(user_id: str):
        body = json_body()
        if body.get("date"):
            entry = service.update_check_in_out(
                user_id,
                date_field(body, "date"),
                check_out=str(body.get("time") or now_local().strftime("%H:%M")),
            )
        else:
            entry = service.check_out(user_id, check_out_time=body.get("time"))
        return jsonify(to_jsonable(entry))

    @app.route("/api/attendance/<user_id>/absent", methods=["POST"], endpoint="attendance_absent")
    def mark_absent(user_id: str):
        body = json_body()
        day = date_field(body, "date", default=now_local().date())
        entry = service.mark_absent(user_id, day, bool(body.get("is_absent", True)))
        return jsonify(to_jsonable(entry))

    @app.route("/api/attendance/<user_id>", methods=["GET"], endpoint="attendance_status")
    def status(user_id: str):
        day = date_arg("date", default=now_local().date())
        return jsonify(to_jsonable(service.status(user_id, day)))

    @app.route("/api/attendance-overview", methods=["GET"], endpoint="attendance_overview")
    def overview():
        day = date_arg("date", default=now_local().date())
        user_ids = request.args.getlist("user_id")
        return jsonify(to_jsonable(service.overview(user_ids, day)))
