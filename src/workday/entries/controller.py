from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import date_arg, json_body, require_field, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.entry_service

    @app.route("/api/entries/<user_id>/<day>", methods=["GET"], endpoint="entry_report")
    def daily_report(user_id: str, day: str):
        return jsonify(to_jsonable(service.daily_report(user_id, parse_iso_date(day))))

    @app.route("/api/entries/<user_id>/<day>/tasks", methods=["POST"], endpoint="entry_assign_task")
    def assign_task(user_id: str, day: str):
        body = json_body()
        entry = service.assign_task(user_id, parse_iso_date(day), str(require_field(body, "task_id")))
        return jsonify(to_jsonable(entry))

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="task_deleted")
    def task_deleted(task_id: str):
        since = date_arg("since", default=now_local().date())
        updated = service.forget_task(task_id, since=since)
        return jsonify({"task_id": task_id, "updated": len(updated)})
