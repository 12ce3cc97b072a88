"""Contract call execution under a call execution policy."""

from __future__ import annotations

import logging

from eth_abi import encode

from enslookup.chain.base import ChainClient, ContractExecutionError, OffchainLookup
from enslookup.chain.gateway import OffchainGateway
from enslookup.core.exceptions import EnsUnknownError, TooManyRedirectionsError
from enslookup.core.policy import CallExecutionPolicy, NoOffchain, OffchainAllowed
from enslookup.core.types import BlockTag

logger = logging.getLogger(__name__)


async def execute_call(
    client: ChainClient,
    to: str,
    data: bytes,
    *,
    policy: CallExecutionPolicy,
    block: BlockTag | str = BlockTag.LATEST,
    gateway: OffchainGateway | None = None,
) -> bytes:
    """
    Execute a contract call, following off-chain lookups when allowed.

    Under ``NoOffchain`` an off-chain lookup is an ordinary revert: it is
    raised when ``fail_on_execution_error`` is set, otherwise the call
    returns empty data. Under ``OffchainAllowed`` each lookup costs one
    redirect; the lookup arriving after ``max_redirects`` redirects have
    been followed raises ``TooManyRedirectionsError``.
    """
    if isinstance(policy, NoOffchain):
        try:
            return await client.eth_call(to, data, block)
        except ContractExecutionError:
            if policy.fail_on_execution_error:
                raise
            logger.debug(f"Call to {to} reverted, returning empty data")
            return b""

    if not isinstance(policy, OffchainAllowed):
        raise TypeError(f"Unsupported call execution policy: {policy!r}")

    owns_gateway = gateway is None
    if gateway is None:
        gateway = OffchainGateway()

    redirects = 0
    try:
        while True:
            try:
                return await client.eth_call(to, data, block)
            except OffchainLookup as lookup:
                if redirects >= policy.max_redirects:
                    raise TooManyRedirectionsError(
                        f"Exceeded {policy.max_redirects} off-chain redirections calling {to}",
                        max_redirects=policy.max_redirects,
                    ) from lookup
                if lookup.sender.lower() != to.lower():
                    raise EnsUnknownError(
                        "Off-chain lookup sender does not match called contract",
                        details={"sender": lookup.sender, "to": to},
                    ) from lookup

                redirects += 1
                logger.debug(
                    f"Following off-chain lookup {redirects}/{policy.max_redirects} for {to}"
                )
                response = await gateway.fetch(lookup)
                data = lookup.callback_function + encode(
                    ["bytes", "bytes"],
                    [response, lookup.extra_data],
                )
    finally:
        if owns_gateway:
            await gateway.close()
