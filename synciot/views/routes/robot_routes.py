from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from synciot.services.ingestion_service import IngestionService
from synciot.services.rover_service import RoverService
from synciot.services.sensor_service import SensorService
from synciot.utils.errors import ValidationError
from synciot.views.params import json_body

robots_bp = Blueprint('robots', __name__, url_prefix='/api/robots')

rovers = RoverService()
sensors = SensorService()
ingestion = IngestionService()


@robots_bp.route('', methods=['GET'])
@login_required
def list_robots():
    return jsonify({"success": True, "data": rovers.list_with_stats()})


@robots_bp.route('', methods=['POST'])
@login_required
def create_robot():
    rover = rovers.create_rover(json_body(), owner_id=current_user.id)
    return jsonify({"success": True, "message": "Robot added successfully", "data": rover.to_dict()}), 201


# -------------------------
# Sensores (aninhados em /robots)
# -------------------------
@robots_bp.route('/<int:robot_id>/sensors', methods=['GET'])
@login_required
def list_sensors(robot_id):
    data = [s.to_dict() for s in sensors.list_sensors(robot_id)]
    return jsonify({"success": True, "data": data})


@robots_bp.route('/<int:robot_id>/sensors', methods=['POST'])
@login_required
def add_sensor(robot_id):
    sensor = sensors.add_sensor(robot_id, json_body())
    return jsonify({"success": True, "message": "Sensor added successfully", "data": sensor.to_dict()}), 201


@robots_bp.route('/<int:robot_id>/sensors/bulk', methods=['POST'])
@login_required
def bulk_sensors(robot_id):
    """Upsert em lote enviado pelo dispositivo (ESP32)."""
    body = json_body()
    entries = body.get("sensors")
    if not isinstance(entries, list) or not entries:
        raise ValidationError("Sensors array is required and must not be empty")

    result = ingestion.ingest_batch(robot_id, entries, mark_online=bool(body.get("mark_online", False)))
    payload = {"success": True, "message": "Sensors updated successfully"}
    payload.update(result.to_dict())
    return jsonify(payload), 200


# -------------------------
# Robôs
# -------------------------
@robots_bp.route('/<int:robot_id>', methods=['GET'])
@login_required
def get_robot(robot_id):
    return jsonify({"success": True, "data": rovers.get_details(robot_id)})


@robots_bp.route('/<int:robot_id>', methods=['PUT'])
@login_required
def update_robot(robot_id):
    rover = rovers.update_rover(robot_id, json_body())
    return jsonify({"success": True, "message": "Robot updated successfully", "data": rover.to_dict()})


@robots_bp.route('/<int:robot_id>', methods=['DELETE'])
@login_required
def delete_robot(robot_id):
    rovers.delete_rover(robot_id)
    return jsonify({"success": True, "message": "Robot deleted successfully"})
