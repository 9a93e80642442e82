from flask import Blueprint
from app.controllers.home_controller import health_check, categories_index

home_bp = Blueprint("home", __name__, url_prefix="/api")

@home_bp.route("/health", methods=["GET"])
def health():
    return health_check()

@home_bp.route("/categories", methods=["GET"])
def categories():
    return categories_index()
