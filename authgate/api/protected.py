"""Protected demo resources.

- GET /topsecret - any authenticated user
- GET /private - any authenticated user, greeted by name
- GET /adminhome - admin only
"""

from flask import Blueprint, g, jsonify

from ..auth.decorators import admin_required, auth_required

protected_bp = Blueprint("protected", __name__)


@protected_bp.route("/topsecret", methods=["GET"])
@auth_required
def top_secret():
    return jsonify({"msg": "SIGNED IN! THIS IS TOP SECRET.  I LIKE PURPLE."})


@protected_bp.route("/private", methods=["GET"])
@auth_required
def private():
    return jsonify({"msg": f"Welcome to my VIP section, {g.username}"})


@protected_bp.route("/adminhome", methods=["GET"])
@admin_required
def admin_home():
    return jsonify({"msg": f"ADMIN DASHBOARD! WELCOME {g.username}"})
