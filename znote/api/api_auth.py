"""
API JSON per l'autenticazione.

POST /api/auth/register   {email, password, name?} -> 201 {message, user, token}
POST /api/auth/login      {email, password}        -> 200 {message, user, token}
GET  /api/auth/profile    (bearer)                 -> 200 {user}
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from znote.api._content import json_object
from znote.middleware.auth import authenticate_request
from znote.services import get_profile, login_user, register_user

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.route("/register", methods=["POST"], strict_slashes=False)
def api_register():
    data = json_object()
    result = register_user(data.get("email"), data.get("password"), data.get("name"))
    return jsonify({"message": "User registered successfully", **result}), 201


@api_auth_bp.route("/login", methods=["POST"], strict_slashes=False)
def api_login():
    data = json_object()
    result = login_user(data.get("email"), data.get("password"))
    return jsonify({"message": "Login successful", **result})


@api_auth_bp.route("/profile", methods=["GET"], strict_slashes=False)
def api_profile():
    caller = authenticate_request()
    return jsonify({"user": get_profile(caller.id)})
