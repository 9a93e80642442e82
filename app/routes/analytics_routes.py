from flask import Blueprint
from app.controllers.analytics_controller import analytics_handler

analytics_bp = Blueprint("analytics", __name__, url_prefix="/api")

@analytics_bp.get("/analytics")
def analytics():
    return analytics_handler()
