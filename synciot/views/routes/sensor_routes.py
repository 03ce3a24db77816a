from flask import Blueprint, jsonify
from flask_login import login_required

from synciot.services.sensor_service import SensorService
from synciot.views.params import json_body

sensors_bp = Blueprint('sensors', __name__, url_prefix='/api/sensors')

service = SensorService()


@sensors_bp.route('/<int:sensor_id>', methods=['GET'])
@login_required
def get_sensor(sensor_id):
    sensor = service.get_sensor(sensor_id)
    data = sensor.to_dict()
    data["rover"] = sensor.rover.summary()
    return jsonify({"success": True, "data": data})


@sensors_bp.route('/<int:sensor_id>', methods=['PUT'])
@login_required
def update_sensor(sensor_id):
    sensor = service.update_sensor(sensor_id, json_body())
    return jsonify({"success": True, "message": "Sensor updated successfully", "data": sensor.to_dict()})


@sensors_bp.route('/<int:sensor_id>', methods=['DELETE'])
@login_required
def delete_sensor(sensor_id):
    service.delete_sensor(sensor_id)
    return jsonify({"success": True, "message": "Sensor deleted successfully"})
