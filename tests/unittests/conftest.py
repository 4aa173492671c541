from unittest import mock

import pytest
from eth_utils import to_checksum_address

from doubles import OPERATOR_ADDRESS, TOKEN_ADDRESS
from token_service.services.utils.factories import construct_flask_app
from token_service.token import TokenRegistry


@pytest.fixture
def token_client():
    client = mock.Mock(address=OPERATOR_ADDRESS)
    client.load.side_effect = lambda address: mock.Mock(address=to_checksum_address(address))
    return client


@pytest.fixture
def current_token():
    return mock.Mock(address=TOKEN_ADDRESS)


@pytest.fixture
def token_registry(token_client, current_token):
    registry = TokenRegistry(token_client)
    registry.dict[TOKEN_ADDRESS] = current_token
    registry.current_address = TOKEN_ADDRESS
    return registry


@pytest.fixture
def empty_token_registry(token_client):
    return TokenRegistry(token_client)


@pytest.fixture
def token_service_app(token_registry):
    app = construct_flask_app(test_config={"TESTING": True})
    app.config["token-registry"] = token_registry
    return app


@pytest.fixture
def token_service_client(token_service_app):
    return token_service_app.test_client()


@pytest.fixture
def empty_token_service_client(empty_token_registry):
    app = construct_flask_app(test_config={"TESTING": True})
    app.config["token-registry"] = empty_token_registry
    return app.test_client()


@pytest.fixture
def config_file(tmp_path):
    """Write the given YAML text to a config file and return its path."""

    def write(text):
        path = tmp_path.joinpath("token-service.yaml")
        path.write_text(text)
        return path

    return write
