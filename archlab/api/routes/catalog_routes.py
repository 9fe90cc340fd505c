from __future__ import annotations

from flask import Blueprint, jsonify, request

from archlab.services.catalog_service import CatalogService

catalog_routes = Blueprint("catalog_routes", __name__)


@catalog_routes.route("/api/presets", methods=["GET"])
def list_presets():
    return jsonify({"presets": CatalogService().list_server_presets()})


@catalog_routes.route("/api/templates", methods=["GET"])
def list_templates():
    payload, status = CatalogService().list_templates()
    return jsonify(payload), status


@catalog_routes.route("/api/templates/<template_id>")
def get_template(template_id: str):
    payload, status = CatalogService().get_template(template_id)
    return jsonify(payload), status


@catalog_routes.route("/api/levels", methods=["GET"])
def list_levels():
    payload, status = CatalogService().list_levels()
    return jsonify(payload), status


@catalog_routes.route("/api/levels/<int:level_id>/evaluate", methods=["POST"])
def evaluate_level(level_id: int):
    payload = request.get_json(silent=True) or {}
    result, status = CatalogService().evaluate_level(level_id, payload)
    return jsonify(result), status
