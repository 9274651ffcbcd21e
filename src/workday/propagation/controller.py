from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.http import date_field, json_body, require_field, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    propagator = container.propagator

    @app.route("/api/tasks/<task_id>/complete", methods=["POST"], endpoint="task_complete")
    def complete(task_id: str):
        body = json_body()
        day = date_field(body, "date", default=now_local().date())
        result = propagator.propagate_completion(
            str(require_field(body, "user_id")),
            day,
            task_id,
            date_field(body, "due_date", default=day),
            notes=body.get("notes"),
        )
        return jsonify(to_jsonable(result))

    @app.route("/api/tasks/<task_id>/reopen", methods=["POST"], endpoint="task_reopen")
    def reopen(task_id: str):
        body = json_body()
        day = date_field(body, "date", default=now_local().date())
        result = propagator.propagate_reopen(
            str(require_field(body, "user_id")),
            day,
            task_id,
            date_field(body, "due_date", default=day),
        )
        return jsonify(to_jsonable(result))
