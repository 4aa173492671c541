import json
import os
import pathlib
from typing import Callable, Optional, Union

import jinja2
import structlog
import yaml
from eth_account import Account
from eth_utils import decode_hex, is_address, to_checksum_address

from token_service.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_RECEIPT_TIMEOUT,
    GAS_STRATEGIES,
)
from token_service.exceptions.config import KeystoreError, ServiceConfigurationError
from token_service.utils.configuration.base import ConfigMapping

log = structlog.get_logger(__name__)


class ServiceConfig(ConfigMapping):
    """Service configuration interface and validator.

    Handles default values as well as exception handling on missing settings.

    Example configuration file::

        >token-service.yaml
        chain_url: http://127.0.0.1:8545
        privkey: "{{ env.TOKEN_SERVICE_PRIVKEY }}"
        gas_price: rpc
        receipt_timeout: 120
        contract_address: "0x5FbDB2315678afecb367f032d93F642f64180aa3"
        host: 127.0.0.1
        port: 5100

    The file is rendered as a jinja2 template before parsing, with the process
    environment available as `env`, so credentials need not be written to disk.

    Instead of `privkey`, an encrypted keystore may be given using the
    `keystore_file` and `password_file` options. The two ways are mutually
    exclusive.
    """

    CONFIGURATION_ERROR = ServiceConfigurationError

    def __init__(self, loaded_yaml: Optional[dict]):
        super(ServiceConfig, self).__init__(loaded_yaml)
        self.validate()

    @classmethod
    def from_file(cls, path: Union[str, pathlib.Path]) -> "ServiceConfig":
        path = pathlib.Path(path)
        with path.open() as f:
            template = jinja2.Template(f.read(), undefined=jinja2.StrictUndefined)
        try:
            rendered = template.render(env=os.environ)
        except jinja2.UndefinedError as e:
            raise ServiceConfigurationError(f"Cannot render {path}: {e}") from e
        try:
            loaded = yaml.safe_load(rendered)
        except yaml.YAMLError as e:
            raise ServiceConfigurationError(f"Cannot parse {path}: {e}") from e
        log.debug("Loaded service configuration", path=str(path))
        return cls(loaded)

    def validate(self):
        self.assert_option(isinstance(self.dict, dict), "Configuration must be a mapping!")
        self.assert_option(self.dict.get("chain_url"), "Missing required option 'chain_url'!")

        has_privkey, has_keystore = "privkey" in self.dict, "keystore_file" in self.dict
        self.assert_option(
            has_privkey != has_keystore,
            "Exactly one of the options 'privkey' and 'keystore_file' must be given!",
        )
        if has_keystore:
            self.assert_option(
                "password_file" in self.dict, "Option 'keystore_file' requires 'password_file'!"
            )

        gas_price = self.gas_price
        self.assert_option(
            gas_price is None
            or (isinstance(gas_price, (int, str)) and not isinstance(gas_price, bool)),
            f"Gas Price must be an integer or one of "
            f"{list(GAS_STRATEGIES.keys())}, not {gas_price}",
        )
        if isinstance(gas_price, str):
            self.assert_option(
                gas_price in GAS_STRATEGIES,
                f"Gas Price must be an integer or one of "
                f"{list(GAS_STRATEGIES.keys())}, not {gas_price}",
            )

        self.assert_option(
            isinstance(self.receipt_timeout, (int, float))
            and not isinstance(self.receipt_timeout, bool)
            and self.receipt_timeout > 0,
            "Option 'receipt_timeout' must be a positive number!",
        )

        contract_address = self.dict.get("contract_address")
        if contract_address is not None:
            self.assert_option(
                is_address(contract_address),
                f"Invalid contract_address: {contract_address!r}, addresses must be quoted",
            )

    @property
    def chain_url(self) -> str:
        return self.dict["chain_url"]

    @property
    def privkey(self) -> bytes:
        """Return the operator's private key, decrypting the keystore if necessary.

        :raises KeystoreError: if the keystore cannot be read or decrypted.
        """
        if "privkey" in self.dict:
            privkey = self.dict["privkey"]
            # Unquoted hex values are parsed as integers by YAML.
            if isinstance(privkey, int):
                return privkey.to_bytes(32, "big")
            return decode_hex(privkey)

        keystore_file = pathlib.Path(self.dict["keystore_file"])
        try:
            password = pathlib.Path(self.dict["password_file"]).read_text().strip()
            keyfile_json = json.loads(keystore_file.read_text())
            return bytes(Account.decrypt(keyfile_json, password))
        except (OSError, ValueError) as e:
            raise KeystoreError(f"Could not decrypt keystore {keystore_file}") from e

    @property
    def gas_price(self) -> Union[str, int, None]:
        """Return the configured gas price.

        Strategy names are upper-cased; `None` lets the node pick the fees.
        """
        gas_price = self.dict.get("gas_price")
        if isinstance(gas_price, str):
            return gas_price.upper()
        return gas_price

    @property
    def gas_price_strategy(self) -> Optional[Callable]:
        """Return the gas price strategy callable requested in :attr:`.gas_price`.

        If the price is an int, the callable will always return :attr:`.gas_price`.
        """
        gas_price = self.gas_price
        if gas_price is None:
            return None

        if isinstance(gas_price, int):

            def fixed_gas_price(*_, **__):
                return gas_price

            return fixed_gas_price

        return GAS_STRATEGIES[gas_price]

    @property
    def receipt_timeout(self) -> float:
        return self.dict.get("receipt_timeout", DEFAULT_RECEIPT_TIMEOUT)

    @property
    def contract_address(self):
        """The contract to load at start-up, if any."""
        address = self.dict.get("contract_address")
        if address is None:
            return None
        return to_checksum_address(address)

    @property
    def host(self) -> str:
        return self.dict.get("host", DEFAULT_HOST)

    @property
    def port(self) -> int:
        return int(self.dict.get("port", DEFAULT_PORT))
