# api/routes/inspections.py
"""
Inspection routes
Create inspections, browse/search/delete history, edit and export results
"""

import os
import logging
from flask import Blueprint, jsonify, request, send_from_directory, current_app

from api.context import get_services
from inspection.exceptions import (
    DataLoadError,
    InvalidInputError,
    InspectionNotFoundError,
    StandardNotFoundError,
)

logger = logging.getLogger(__name__)

inspections_bp = Blueprint('inspections', __name__)


def _invalid(e):
    return jsonify({"error": e.message, "details": e.problems}), 400


@inspections_bp.route('/inspections', methods=['POST'])
def create_inspection():
    """
    Create an inspection

    Expected JSON body:
        - name: Inspection name (required)
        - standard: Standard id (required)
        - note: Free text (optional)
        - price: 0 - 100,000, two decimals max (optional)
        - samplingPoints: Subset of "Front End", "Back End", "Other" (optional)
        - dateTimeOfSampling: ISO-8601 (optional)
        - rawData: Uploaded grain batch (optional, defaults to raw.json)

    Returns:
        JSON: Inspection id and calculation result
    """
    form = request.get_json(silent=True)
    if not isinstance(form, dict):
        return jsonify({"error": "No data provided"}), 400

    raw_data = form.get('rawData')

    try:
        inspection_id, calculation = get_services().inspections.create_inspection(form, raw_data)
        return jsonify({"id": inspection_id, "result": calculation.to_dict()}), 201
    except InvalidInputError as e:
        logger.warning(f"Rejected inspection: {e.problems}")
        return _invalid(e)
    except StandardNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404
    except DataLoadError as e:
        logger.error(f"Error creating inspection: {e}")
        return jsonify({"error": str(e)}), 500


@inspections_bp.route('/history', methods=['GET'])
def get_history():
    """
    List inspection history, newest first

    Query params:
        - search: Optional id substring (case-insensitive)

    Returns:
        JSON: List of history items
    """
    search_term = request.args.get('search', '').strip()
    service = get_services().inspections

    if search_term:
        items = service.search_history(search_term)
    else:
        items = service.get_history()

    return jsonify({"history": items, "count": len(items)}), 200


@inspections_bp.route('/history', methods=['DELETE'])
def delete_history():
    """
    Delete history items

    Expected JSON body:
        - ids: List of inspection ids

    Returns:
        JSON: Ids actually deleted
    """
    data = request.get_json(silent=True) or {}
    ids = data.get('ids')

    if not isinstance(ids, list) or not ids:
        return jsonify({"error": "ids must be a non-empty list"}), 400

    deleted = get_services().inspections.delete_history(ids)
    return jsonify({"deleted": deleted, "count": len(deleted)}), 200


@inspections_bp.route('/inspections/<inspection_id>', methods=['GET'])
def get_inspection(inspection_id):
    """
    Get a full inspection result

    Returns:
        JSON: Inspection result with composition and defect rows
    """
    try:
        result = get_services().inspections.get_inspection_result(inspection_id)
        return jsonify(result.to_dict()), 200
    except InspectionNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404


@inspections_bp.route('/inspections/<inspection_id>', methods=['PUT'])
def update_inspection(inspection_id):
    """
    Edit note, price, sampling point and sampling date/time

    Returns:
        JSON: Updated inspection result
    """
    changes = request.get_json(silent=True)
    if not isinstance(changes, dict):
        return jsonify({"error": "No data provided"}), 400

    try:
        result = get_services().inspections.update_inspection(inspection_id, changes)
        return jsonify(result.to_dict()), 200
    except InspectionNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404
    except InvalidInputError as e:
        logger.warning(f"Rejected update of {inspection_id}: {e.problems}")
        return _invalid(e)


@inspections_bp.route('/inspections/<inspection_id>/excel', methods=['GET'])
def export_inspection(inspection_id):
    """
    Download the inspection report as an Excel workbook
    """
    services = get_services()
    try:
        result = services.inspections.get_inspection_result(inspection_id)
        excel_filename = services.reports.export_excel(result)
    except InspectionNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404
    except OSError as e:
        logger.error(f"Error exporting inspection {inspection_id}: {e}")
        return jsonify({"error": "Failed to export report"}), 500

    return send_from_directory(
        os.path.abspath(current_app.config['EXCEL_FOLDER']),
        excel_filename,
        as_attachment=True
    )
