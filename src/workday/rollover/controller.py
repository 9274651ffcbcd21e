from __future__ import annotations

import click
from flask import Flask, jsonify

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import date_field, json_body, to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.rollover_engine

    @app.route("/api/rollover/<user_id>/day", methods=["POST"], endpoint="rollover_day")
    def rollover_day(user_id: str):
        body = json_body()
        result = engine.rollover_day(user_id, date_field(body, "from_date"), date_field(body, "to_date"))
        return jsonify(to_jsonable(result))

    @app.route("/api/rollover/<user_id>/week", methods=["POST"], endpoint="rollover_week")
    def rollover_week(user_id: str):
        body = json_body()
        return jsonify(engine.rollover_week(user_id, date_field(body, "week_start")).as_dict())

    @app.route("/api/rollover/<user_id>/catch-up", methods=["POST"], endpoint="rollover_catch_up")
    def catch_up(user_id: str):
        body = json_body()
        target = date_field(body, "target_date", default=now_local().date())
        return jsonify(engine.catch_up(user_id, target).as_dict())

    # CLI entry points for scheduled callers (cron, CI); the engine never schedules itself.
    @app.cli.command("rollover-week")
    @click.argument("user_id")
    @click.argument("week_start")
    def rollover_week_command(user_id: str, week_start: str) -> None:
        result = engine.rollover_week(user_id, parse_iso_date(week_start))
        _echo_batch(result.as_dict())

    @app.cli.command("rollover-catch-up")
    @click.option("--date", "target", default=None, help="Target day (YYYY-MM-DD), default today.")
    @click.option("--user", "user_id", default=None, help="Only this user; default all active users.")
    def rollover_catch_up_command(target: str | None, user_id: str | None) -> None:
        target_date = parse_iso_date(target) if target else now_local().date()
        if user_id:
            result = engine.catch_up(user_id, target_date)
        else:
            result = engine.catch_up_all(target_date)
        _echo_batch(result.as_dict())


def _echo_batch(summary: dict) -> None:
    click.echo(f"processed={len(summary['processed'])} skipped={len(summary['skipped'])} errors={len(summary['errors'])}")
    for err in summary["errors"]:
        click.echo(f"  ! {err['key']}: {err['message']}", err=True)
