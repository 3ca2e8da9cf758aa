"""
Route comuni alle API di note, task e idee.

    GET    /           -> {"<plural>": [...]}
    POST   /           -> 201 {"message", "<entity>"}
    POST   /sync       -> 201 {"message", "count"}
    GET    /<id>       -> {"<entity>"}
    PUT    /<id>       -> {"message", "<entity>"}
    DELETE /<id>       -> {"message"}
"""

from __future__ import annotations

from typing import Any, Iterable

from flask import Blueprint, jsonify, request

from znote.errors import ValidationError
from znote.middleware.auth import current_user_id
from znote.services import ContentService


def json_body() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be valid JSON")
    return data


def json_object() -> dict:
    data = json_body()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_content_routes(
    bp: Blueprint, service: ContentService, list_filters: Iterable[str] = ()
) -> Blueprint:
    entity, plural, label = service.entity, service.plural, service.label
    list_filters = tuple(list_filters)

    @bp.route("", methods=["GET"])
    @bp.route("/", methods=["GET"])
    def list_records():
        filters = {
            name: request.args.get(name)
            for name in list_filters
            if request.args.get(name)
        }
        records = service.list(current_user_id(), **filters)
        return jsonify({plural: [record.to_dict() for record in records]})

    @bp.route("", methods=["POST"])
    @bp.route("/", methods=["POST"])
    def create_record():
        record = service.create(current_user_id(), json_object())
        return jsonify(
            {"message": f"{label} created successfully", entity: record.to_dict()}
        ), 201

    @bp.route("/sync", methods=["POST"], strict_slashes=False)
    def sync_records():
        """
        Import massivo dei record creati in modalità ospite.

        Body: un array JSON oppure ``{"<plural>": [...]}``.
        """
        data = json_body()
        records = data.get(plural) if isinstance(data, dict) else data
        count = service.bulk_import(current_user_id(), records)
        return jsonify(
            {"message": f"{count} {plural} synced successfully", "count": count}
        ), 201

    @bp.route("/<record_id>", methods=["GET"], strict_slashes=False)
    def get_record(record_id: str):
        record = service.get(current_user_id(), record_id)
        return jsonify({entity: record.to_dict()})

    @bp.route("/<record_id>", methods=["PUT"], strict_slashes=False)
    def update_record(record_id: str):
        record = service.update(current_user_id(), record_id, json_object())
        return jsonify(
            {"message": f"{label} updated successfully", entity: record.to_dict()}
        )

    @bp.route("/<record_id>", methods=["DELETE"], strict_slashes=False)
    def delete_record(record_id: str):
        service.delete(current_user_id(), record_id)
        return jsonify({"message": f"{label} deleted successfully"})

    return bp
