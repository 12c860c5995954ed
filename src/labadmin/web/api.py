"""
REST API endpoints for lab administration.
"""

import logging

from flask import Blueprint, g, jsonify, request

from labadmin import __version__
from labadmin.core.models import LabForm, parse_flag
from labadmin.store.base import StoreError
from labadmin.web.events import broadcast_labs_changed

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _store_error(e: StoreError):
    logger.warning(f"Store call failed: {e}")
    return jsonify({"error": str(e)}), 502


def _find_lab(lab_id: str):
    """Fetch a lab by id from the store's current list."""
    for lab in g.store.list_labs():
        if lab.id == lab_id:
            return lab
    return None


def _parse_form():
    """Parse a JSON lab body, or return an error response."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({"error": "JSON body is required"}), 400)

    form = LabForm.from_form(data)
    if not form.name or not form.building:
        return None, (jsonify({"error": "name and building are required"}), 400)

    return form, None


# --- Lab Endpoints ---

@api_bp.route("/labs", methods=["GET"])
def list_labs():
    """List all labs ordered by building, then name."""
    try:
        labs = g.store.list_labs()
    except StoreError as e:
        return _store_error(e)

    return jsonify({
        "labs": [lab.to_dict() for lab in labs],
        "count": len(labs),
    })


@api_bp.route("/labs", methods=["POST"])
def create_lab():
    """Create new lab. New labs start out available."""
    form, error = _parse_form()
    if error:
        return error

    record = form.to_record()
    record["is_available"] = True

    try:
        lab = g.store.insert(record)
    except StoreError as e:
        return _store_error(e)

    broadcast_labs_changed()
    return jsonify(lab.to_dict() if lab else record), 201


@api_bp.route("/labs/<lab_id>", methods=["PUT"])
def update_lab(lab_id: str):
    """Replace a lab's form fields. Availability is left alone."""
    form, error = _parse_form()
    if error:
        return error

    try:
        if not _find_lab(lab_id):
            return jsonify({"error": f"Lab '{lab_id}' not found"}), 404
        g.store.update(lab_id, form.to_record())
        lab = _find_lab(lab_id)
    except StoreError as e:
        return _store_error(e)

    broadcast_labs_changed()
    return jsonify(lab.to_dict() if lab else {"id": lab_id})


@api_bp.route("/labs/<lab_id>/toggle", methods=["POST"])
def toggle_lab(lab_id: str):
    """Flip a lab's availability.

    Body may carry {"current": true|false}; otherwise the stored value is used.
    """
    data = request.get_json(silent=True)
    if data is None and not request.get_data():
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body is required"}), 400

    try:
        if "current" in data:
            current = parse_flag(data["current"])
        else:
            lab = _find_lab(lab_id)
            if not lab:
                return jsonify({"error": f"Lab '{lab_id}' not found"}), 404
            current = lab.is_available

        g.store.update(lab_id, {"is_available": not current})
    except StoreError as e:
        return _store_error(e)

    broadcast_labs_changed()
    return jsonify({"id": lab_id, "is_available": not current})


@api_bp.route("/labs/<lab_id>", methods=["DELETE"])
def delete_lab(lab_id: str):
    """Delete lab."""
    try:
        g.store.delete(lab_id)
    except StoreError as e:
        return _store_error(e)

    broadcast_labs_changed()
    return jsonify({"message": f"Lab '{lab_id}' deleted"}), 200


# --- Status Endpoints ---

@api_bp.route("/health", methods=["GET"])
def health_check():
    """System health check."""
    return jsonify({
        "status": "healthy",
        "version": __version__,
    })
