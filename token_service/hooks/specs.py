import flask
import pluggy

from token_service.constants import HOST_NAMESPACE

HOOK_SPEC = pluggy.HookspecMarker(HOST_NAMESPACE)


@HOOK_SPEC
def register_blueprints(app: flask.Flask) -> None:
    """Register a list of blueprints with the :mod:`token_service` application."""
