"""
API JSON per le idee.

Endpoint principali (oltre alle route comuni di CRUD e sync):

GET /api/ideas?category=<name>
    Idee di una categoria, dalla più recente.

GET /api/ideas/search?query=<text>
    Corrispondenza case-insensitive su titolo e descrizione, oppure tag esatto.
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from znote.api._content import register_content_routes
from znote.middleware.auth import current_user_id, require_auth
from znote.services import idea_service

api_ideas_bp = Blueprint("api_ideas", __name__)

require_auth(api_ideas_bp)


@api_ideas_bp.route("/search", methods=["GET"], strict_slashes=False)
def api_search_ideas():
    ideas = idea_service.search(current_user_id(), request.args.get("query"))
    return jsonify({"ideas": [idea.to_dict() for idea in ideas]})


register_content_routes(api_ideas_bp, idea_service, list_filters=("category",))
