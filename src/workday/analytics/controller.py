from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import date_arg, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    analytics = container.analytics_service

    @app.route("/api/analytics/weekly/<user_id>/<week_start>", methods=["GET"], endpoint="analytics_weekly")
    def weekly(user_id: str, week_start: str):
        return jsonify(to_jsonable(analytics.weekly_analytics(user_id, parse_iso_date(week_start))))

    @app.route("/api/analytics/team/<team_id>", methods=["GET"], endpoint="analytics_team")
    def team(team_id: str):
        report = analytics.team_analytics(team_id, date_arg("from"), date_arg("to"))
        return jsonify(to_jsonable(report))
