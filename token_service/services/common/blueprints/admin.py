from flask import Blueprint, Response

admin_blueprint = Blueprint("admin_view", __name__)


@admin_blueprint.route("/status")
def status_view() -> Response:
    """Return 200 OK as long as the app is responsive."""
    return Response(status=200)
