from flask import Blueprint, current_app, jsonify

from synciot.utils.clock import utcnow

main = Blueprint('main', __name__, url_prefix='/api')


@main.route('/health', methods=['GET'])
def health():
    return jsonify({
        "message": "Backend is running",
        "timestamp": utcnow().isoformat(),
        "environment": current_app.config.get("ENV_NAME", "development"),
    }), 200
