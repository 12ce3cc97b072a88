"""Chain access: client protocol, call execution and off-chain gateways."""

from enslookup.chain.base import ChainClient, ContractExecutionError, OffchainLookup
from enslookup.chain.calls import execute_call
from enslookup.chain.gateway import OffchainGateway
from enslookup.chain.web3_client import Web3ChainClient

__all__ = [
    "ChainClient",
    "ContractExecutionError",
    "OffchainGateway",
    "OffchainLookup",
    "Web3ChainClient",
    "execute_call",
]
