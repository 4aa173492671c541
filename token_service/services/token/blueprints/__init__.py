import pluggy

from token_service.constants import HOST_NAMESPACE
from token_service.services.token.blueprints.contract import contract_blueprint
from token_service.services.token.blueprints.errors import errors_blueprint
from token_service.services.token.blueprints.queries import queries_blueprint
from token_service.services.token.blueprints.transactions import transactions_blueprint

__all__ = ["contract_blueprint", "errors_blueprint", "queries_blueprint", "transactions_blueprint"]


HOOK_IMPL = pluggy.HookimplMarker(HOST_NAMESPACE)


@HOOK_IMPL
def register_blueprints(app):
    for bp in (contract_blueprint, errors_blueprint, queries_blueprint, transactions_blueprint):
        app.register_blueprint(bp)
