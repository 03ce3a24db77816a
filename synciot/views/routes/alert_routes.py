from flask import Blueprint, current_app, jsonify, request

from synciot.services.alert_service import AlertService
from synciot.views.params import bool_arg, int_arg, json_body

alerts_bp = Blueprint('alerts', __name__, url_prefix='/api/alerts')

service = AlertService()


@alerts_bp.route('', methods=['GET'])
def list_alerts():
    result = service.list_alerts(
        severity=request.args.get("severity"),
        is_resolved=bool_arg("is_resolved"),
        rover_id=int_arg("rover_id"),
        page=int_arg("page", 1),
        limit=int_arg("limit") or current_app.config.get("DEFAULT_PAGE_SIZE", 20),
    )
    result["success"] = True
    return jsonify(result)


@alerts_bp.route('', methods=['POST'])
def create_alert():
    alert = service.create_alert(json_body())
    return jsonify({"success": True, "message": "Alert created successfully",
                    "data": alert.to_dict(include_rover=True)}), 201


@alerts_bp.route('/<int:alert_id>', methods=['GET'])
def get_alert(alert_id):
    alert = service.get_alert(alert_id)
    return jsonify({"success": True, "data": alert.to_dict(include_rover=True)})


@alerts_bp.route('/<int:alert_id>/resolve', methods=['POST'])
def resolve_alert(alert_id):
    alert = service.resolve_alert(alert_id)
    return jsonify({"success": True, "message": "Alert resolved successfully",
                    "data": alert.to_dict(include_rover=True)})
