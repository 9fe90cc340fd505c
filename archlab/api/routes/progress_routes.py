from __future__ import annotations

from flask import Blueprint, jsonify, request

from archlab.services.catalog_service import CatalogService
from archlab.services.progress_service import ProgressService

progress_routes = Blueprint("progress_routes", __name__)


@progress_routes.route("/api/progress/<player_id>", methods=["GET"])
def get_progress(player_id: str):
    progress = ProgressService().get_progress(player_id)
    return jsonify(ProgressService.serialize(progress))


@progress_routes.route("/api/progress/<player_id>/levels/<int:level_id>", methods=["POST"])
def submit_level(player_id: str, level_id: int):
    payload = request.get_json(silent=True) or {}
    evaluation, status = CatalogService().evaluate_level(level_id, payload)
    if status != 200:
        return jsonify(evaluation), status

    progress = ProgressService().record_result(player_id, evaluation)
    return jsonify({"evaluation": evaluation, "progress": ProgressService.serialize(progress)})


@progress_routes.route("/api/progress/<player_id>", methods=["DELETE"])
def reset_progress(player_id: str):
    if not ProgressService().reset(player_id):
        return jsonify({"error": "Progress not found."}), 404
    return jsonify({"status": "deleted"})
