from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import caller_required, json_body, json_endpoint
from ..common.validators import loose_int, optional_int
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/attendance", methods=["POST"], endpoint="give_attendance")
    @caller_required
    @json_endpoint
    def give_attendance():
        body = json_body()
        time_slot = body.get("time")
        record = attendance.give_attendance(
            g.caller,
            body.get("subject", ""),
            loose_int(body.get("date")),
            None if time_slot == "" else loose_int(time_slot),
            payment=body.get("payment"),
        )
        return jsonify({"success": True, "record": record.to_dict()}), 201

    @app.route("/attendance/<recorder>/<subject>/<int:date_key>", methods=["GET"], endpoint="professor_attendance")
    @json_endpoint
    def professor_attendance(recorder: str, subject: str, date_key: int):
        time_slot = optional_int(request.args.get("time"), "time")
        present = attendance.professor_attendance(recorder, subject, date_key, time_slot)
        return jsonify(
            {"recorder": recorder, "subject": subject, "date": date_key, "time": time_slot, "present": present}
        )

    @app.route("/attendance/slots/<subject>/<int:date_key>/<int:time_slot>", methods=["GET"], endpoint="has_attendance")
    @json_endpoint
    def has_attendance(subject: str, date_key: int, time_slot: int):
        recorder = attendance.slot_owner(subject, date_key, time_slot)
        return jsonify(
            {"subject": subject, "date": date_key, "time": time_slot, "present": recorder is not None, "recorder": recorder}
        )

    @app.route("/attendance/history/<subject>", methods=["GET"], endpoint="attendance_history")
    @json_endpoint
    def attendance_history(subject: str):
        limit = optional_int(request.args.get("limit"), "limit")
        if limit is None:
            limit = DEFAULT_HISTORY_LIMIT
        limit = max(1, min(limit, 500))
        rows = attendance.history_for_subject(subject, limit=limit)
        return jsonify({"subject": subject, "records": [r.to_dict() for r in rows]})
