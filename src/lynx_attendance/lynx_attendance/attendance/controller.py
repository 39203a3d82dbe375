from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import current_user, json_body, login_required, requires
from ..common.validators import (
    optional_datetime,
    optional_coordinate,
    optional_int,
    optional_text,
    require_date,
    require_id_list,
    require_int,
    require_non_empty,
    require_status,
)
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.permissions import Operation
from .model import AttendanceRecord, AttendanceReportRow
from .service import ScanOutcome


def _iso(value):
    return value.isoformat() if value else None


def record_json(r: AttendanceRecord | None):
    if r is None:
        return None
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "date": r.work_date.isoformat(),
        "checkIn": _iso(r.check_in_time),
        "checkOut": _iso(r.check_out_time),
        "status": r.status.value,
        "latitude": r.latitude,
        "longitude": r.longitude,
        "notes": r.note,
        "projectId": r.project_id,
        "validatedById": r.validated_by,
    }


def row_json(r: AttendanceReportRow) -> dict:
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "firstName": r.first_name,
        "lastName": r.last_name,
        "date": r.work_date.isoformat(),
        "checkIn": _iso(r.check_in_time),
        "checkOut": _iso(r.check_out_time),
        "status": r.status.value,
        "notes": r.note,
        "projectId": r.project_id,
        "projectName": r.project_name,
        "validatedBy": r.validator_name,
    }


def _scan_json(outcome: ScanOutcome) -> dict:
    return {
        "success": outcome.success,
        "message": outcome.message,
        "worker": {"id": outcome.worker.user_id, "name": outcome.worker.full_name},
        "record": record_json(outcome.record),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_attendance_check_in")
    @requires(Operation.SELF_CHECK_IN)
    def check_in():
        data = json_body()
        record = container.attendance_service.check_in(
            current_user(),
            latitude=optional_coordinate(data.get("latitude"), "latitude", 90),
            longitude=optional_coordinate(data.get("longitude"), "longitude", 180),
            project_id=optional_int(data.get("projectId"), "projectId"),
            notes=optional_text(data.get("notes")),
        )
        return jsonify(record_json(record)), 201

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_attendance_scan")
    @requires(Operation.QR_SCAN)
    def scan():
        data = json_body()
        token = require_non_empty(data.get("qrToken", ""), "qrToken")
        outcome = container.attendance_service.scan(current_user(), qr_token=token)
        return jsonify(_scan_json(outcome)), 200

    @app.route("/api/attendance/scan/image", methods=["POST"], endpoint="api_attendance_scan_image")
    @requires(Operation.QR_SCAN)
    def scan_image():
        """Same as /scan, but the token is read from an uploaded badge photo."""
        if "image" not in request.files:
            raise ValidationError("image file is required")

        token = container.badge_service.read_token(request.files["image"].stream)
        outcome = container.attendance_service.scan(current_user(), qr_token=token)
        return jsonify(_scan_json(outcome)), 200

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_upsert")
    @requires(Operation.ADMIN_WRITE)
    def upsert():
        data = json_body()
        outcome = container.attendance_service.upsert(
            current_user(),
            user_id=require_int(data.get("userId"), "userId"),
            work_date=require_date(data.get("date"), "date"),
            status=require_status(data.get("status")),
            check_in_time=optional_datetime(data.get("checkIn"), "checkIn"),
            check_out_time=optional_datetime(data.get("checkOut"), "checkOut"),
            notes=optional_text(data.get("notes")),
        )
        return jsonify(record_json(outcome.record)), (201 if outcome.created else 200)

    @app.route("/api/attendance/validate", methods=["POST"], endpoint="api_attendance_validate")
    @requires(Operation.VALIDATE_BATCH)
    def validate():
        data = json_body()
        ids = require_id_list(data.get("attendanceIds"), "attendanceIds")
        count = container.attendance_service.validate(current_user(), attendance_ids=ids)
        return jsonify({"success": True, "count": count})

    @app.route("/api/attendance/transmit", methods=["POST"], endpoint="api_attendance_transmit")
    @requires(Operation.TRANSMIT)
    def transmit():
        data = json_body()
        work_date = require_date(data.get("date"), "date")
        ids = require_id_list(data.get("attendanceIds"), "attendanceIds", allow_empty=False)
        result = container.transmission_service.transmit(current_user(), work_date=work_date, attendance_ids=ids)
        return jsonify(
            {
                "success": True,
                "recipientsCount": result.recipients_count,
                "recordsCount": result.records_count,
            }
        )

    @app.route("/api/attendance/team-today", methods=["GET"], endpoint="api_attendance_team_today")
    @requires(Operation.LIST_REPORT)
    def team_today():
        raw = request.args.get("date")
        work_date = require_date(raw, "date") if raw else now_local().date()
        rows = container.attendance_service.list_team_day(current_user(), work_date=work_date)
        return jsonify([row_json(r) for r in rows])

    @app.route("/api/attendance/me/today", methods=["GET"], endpoint="api_attendance_me_today")
    @login_required
    def my_today():
        record = container.attendance_service.get_today_record(current_user().user_id, now_local().date())
        return jsonify(record_json(record))
