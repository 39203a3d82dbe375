from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import current_user, requires
from ..common.validators import optional_int, require_date, require_period
from ..container import Container
from ..core.permissions import Operation
from .service import ReportData


def register(app: Flask, container: Container) -> None:
    def _build() -> ReportData:
        args = request.args
        raw_date = args.get("date")
        return container.report_service.build(
            current_user(),
            period=require_period(args.get("period")),
            reference=require_date(raw_date, "date") if raw_date else now_local().date(),
            project_id=optional_int(args.get("projectId"), "projectId"),
            team_id=optional_int(args.get("teamId"), "teamId"),
        )

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @requires(Operation.LIST_REPORT)
    def report():
        data = _build()
        return jsonify(
            {
                "period": data.period.value,
                "start": data.start.isoformat(),
                "end": data.end.isoformat(),
                "count": len(data.rows),
                "rows": data.rows,
            }
        )

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="api_attendance_report_csv")
    @requires(Operation.LIST_REPORT)
    def report_csv():
        data = _build()
        filename = f"attendance_{data.period.value}_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            container.report_service.to_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
