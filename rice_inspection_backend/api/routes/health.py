# api/routes/health.py
"""
Health check endpoint
Verifies the server is running and the standards catalogue is reachable
"""

import os
import time
from flask import Blueprint, jsonify, current_app

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint

    Returns:
        JSON: Status, timestamp and whether the standards file is present
    """
    return jsonify({
        "status": "healthy",
        "standards_file": os.path.exists(current_app.config['STANDARDS_FILE']),
        "timestamp": time.time()
    }), 200
