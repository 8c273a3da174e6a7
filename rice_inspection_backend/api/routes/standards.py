# api/routes/standards.py
"""
Standards routes
Read-only access to the inspection standards catalogue
"""

import logging
from flask import Blueprint, jsonify

from api.context import get_services
from inspection.exceptions import DataLoadError, StandardNotFoundError

logger = logging.getLogger(__name__)

standards_bp = Blueprint('standards', __name__)


@standards_bp.route('/standards', methods=['GET'])
def get_standards():
    """
    List all standards

    Returns:
        JSON: List of standards with their categories
    """
    try:
        standards = get_services().standards.get_standards()
        return jsonify([s.to_dict() for s in standards]), 200
    except DataLoadError as e:
        logger.error(f"Error loading standards: {e}")
        return jsonify({"error": "Failed to fetch standards"}), 500


@standards_bp.route('/standards/<standard_id>', methods=['GET'])
def get_standard(standard_id):
    """
    Get one standard

    Args:
        standard_id: Standard id

    Returns:
        JSON: Standard with its categories
    """
    try:
        standard = get_services().standards.get_standard(standard_id)
        return jsonify(standard.to_dict()), 200
    except StandardNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404
    except DataLoadError as e:
        logger.error(f"Error loading standards: {e}")
        return jsonify({"error": "Failed to fetch standards"}), 500
