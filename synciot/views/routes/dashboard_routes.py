from flask import Blueprint, jsonify

from synciot.services.dashboard_service import DashboardService

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')

service = DashboardService()


@dashboard_bp.route('/stats', methods=['GET'])
def stats():
    return jsonify({"success": True, "data": service.stats()})
