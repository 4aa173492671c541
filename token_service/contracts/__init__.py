"""Compiled contract artifacts used by the token service.

Artifacts are JSON files named after their contract, holding the contract's
`abi` and its deployment bytecode under `bin`.
"""
import json
import pathlib
from functools import lru_cache

from typing_extensions import TypedDict

from token_service.constants import CONTRACT_ERC20_TEST

CONTRACTS_PATH = pathlib.Path(__file__).parent

ContractArtifact = TypedDict("ContractArtifact", {"contractName": str, "abi": list, "bin": str})


@lru_cache(maxsize=None)
def get_contract(contract_name: str = CONTRACT_ERC20_TEST) -> ContractArtifact:
    """Load the artifact of `contract_name` from disk.

    :raises FileNotFoundError: if no artifact exists for `contract_name`.
    """
    artifact_path = CONTRACTS_PATH.joinpath(f"{contract_name}.json")
    return json.loads(artifact_path.read_text())


def get_contract_abi(contract_name: str = CONTRACT_ERC20_TEST) -> list:
    return get_contract(contract_name)["abi"]


def get_contract_bytecode(contract_name: str = CONTRACT_ERC20_TEST) -> str:
    return get_contract(contract_name)["bin"]
