from flask import Blueprint, jsonify

from synciot.services.command_service import CommandService
from synciot.services.rover_service import RoverService
from synciot.views.params import int_arg, json_body

rover_bp = Blueprint('rover', __name__, url_prefix='/api/rover')

rovers = RoverService()
commands = CommandService()


@rover_bp.route('', methods=['GET'])
def list_rovers():
    data = rovers.list_with_stats()
    return jsonify({"success": True, "data": data, "count": len(data)})


@rover_bp.route('/<int:rover_id>', methods=['GET'])
def get_rover(rover_id):
    return jsonify({"success": True, "data": rovers.get_details(rover_id)})


@rover_bp.route('/<int:rover_id>/command', methods=['POST'])
def send_command(rover_id):
    cmd = commands.send_command(rover_id, json_body().get("command"))
    return jsonify({"success": True, "message": "Command sent successfully", "data": cmd.to_dict()}), 201


@rover_bp.route('/<int:rover_id>/commands', methods=['GET'])
def list_commands(rover_id):
    data = [c.to_dict() for c in commands.list_for_rover(rover_id, int_arg("limit", 10))]
    return jsonify({"success": True, "data": data})
