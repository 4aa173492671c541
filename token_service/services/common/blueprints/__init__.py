import pluggy

from token_service.constants import HOST_NAMESPACE
from token_service.services.common.blueprints.admin import admin_blueprint
from token_service.services.common.blueprints.metrics import metrics_blueprint

__all__ = ["admin_blueprint", "metrics_blueprint"]


HOOK_IMPL = pluggy.HookimplMarker(HOST_NAMESPACE)


@HOOK_IMPL
def register_blueprints(app):
    for bp in (admin_blueprint, metrics_blueprint):
        app.register_blueprint(bp)
