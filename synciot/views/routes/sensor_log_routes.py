from flask import Blueprint, current_app, jsonify, request

from synciot.services.aggregation_service import AggregationService, SensorLogFilter, SortSpec
from synciot.services.ingestion_service import IngestionService
from synciot.views.params import date_arg, float_arg, int_arg, json_body

sensor_logs_bp = Blueprint('sensor_logs', __name__, url_prefix='/api/sensor-logs')

aggregation = AggregationService()
ingestion = IngestionService()


@sensor_logs_bp.route('', methods=['GET'])
def list_sensor_logs():
    """Leituras com paginação, filtros, ordenação e busca pelo nome do rover."""
    flt = SensorLogFilter(
        rover_id=int_arg("rover_id"),
        temperature_min=float_arg("temp_min"),
        temperature_max=float_arg("temp_max"),
        battery_min=float_arg("battery_min"),
        date_from=date_arg("date_from"),
        date_to=date_arg("date_to"),
        search=request.args.get("search") or None,
    )
    sort = SortSpec(
        field=request.args.get("sort_by", "created_at"),
        order="asc" if request.args.get("sort_order") == "asc" else "desc",
    )
    page = aggregation.list_filtered(
        flt, sort,
        page=int_arg("page", 1),
        limit=int_arg("limit") or current_app.config.get("DEFAULT_PAGE_SIZE", 20),
    )

    payload = {"success": True}
    payload.update(page.to_dict())
    payload["filters"] = {
        "rover_id": flt.rover_id,
        "temperature_range": (
            {"min": flt.temperature_min, "max": flt.temperature_max}
            if flt.temperature_min is not None or flt.temperature_max is not None else None
        ),
        "battery_min": flt.battery_min,
        "date_range": (
            {"from": flt.date_from.isoformat() if flt.date_from else None,
             "to": flt.date_to.isoformat() if flt.date_to else None}
            if flt.date_from or flt.date_to else None
        ),
        "search": flt.search,
    }
    return jsonify(payload)


@sensor_logs_bp.route('', methods=['POST'])
def create_sensor_log():
    log = ingestion.record_sensor_log(json_body())
    return jsonify({"success": True, "message": "Sensor log created successfully",
                    "data": log.to_dict(include_rover=True)}), 201


@sensor_logs_bp.route('/stats/aggregated', methods=['GET'])
def aggregated_stats():
    days = int_arg("days") or current_app.config.get("STATS_DEFAULT_DAYS", 30)
    stats = aggregation.summarize(rover_id=int_arg("rover_id"), window_days=days)
    return jsonify({"success": True, "data": stats.to_dict()})
