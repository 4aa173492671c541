"""Create and serve the token service's flask app."""
from typing import Mapping, Optional

import flask
import structlog
import waitress

from token_service import __version__
from token_service.services.utils.factories import construct_flask_app
from token_service.token import TokenClient, TokenRegistry
from token_service.utils.configuration import ServiceConfig

log = structlog.get_logger(__name__)

NAME = "ERC20-Token-Service"


def create_token_service(
    config: ServiceConfig, test_config: Mapping = None, client: Optional[TokenClient] = None
) -> flask.Flask:
    """Create the token service app, with a fresh :class:`TokenRegistry` in its config.

    If `config` names a `contract_address`, that contract is loaded as the
    current one. `client` defaults to a :class:`TokenClient` created from `config`.
    """
    log.info("Creating Token Service Flask App", version=__version__, name=NAME)
    app = construct_flask_app(test_config=test_config)

    log.debug("Creating Token Registry")
    registry = TokenRegistry(client or TokenClient.from_config(config))
    if config.contract_address:
        registry.load(config.contract_address)
    app.config["token-registry"] = registry
    return app


def serve(config: ServiceConfig, host: Optional[str] = None, port: Optional[int] = None) -> None:
    app = create_token_service(config)
    host, port = host or config.host, port or config.port
    log.info("Serving token service", host=host, port=port)
    waitress.serve(app, host=host, port=port)
