from __future__ import annotations

from typing import Any

import httpx

from .config_types import ClientConfig, resolve_client_config
from .engine import RequestEngine
from .models import (
    AbiDescriptor,
    Address,
    CallRequest,
    ChainId,
    ContractCallResponse,
    MetadataProtocolId,
    MetadataRequest,
)

CALL_PATH = "/call"
METADATA_PATH = "/metadata"


class SpecRpcClient:
    """Calls contract read methods and resolves off-chain metadata."""

    def __init__(
            self,
            cfg: ClientConfig | None = None,
            *,
            origin: str | None = None,
            auth_token: str | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        if cfg is None:
            cfg = resolve_client_config(origin=origin, auth_token=auth_token)
        self._engine = RequestEngine(cfg, transport)

    @property
    def config(self) -> ClientConfig:
        return self._engine.config

    @property
    def call_url(self) -> str:
        return self._engine.url_for(CALL_PATH)

    @property
    def metadata_url(self) -> str:
        return self._engine.url_for(METADATA_PATH)

    async def call(
            self,
            chain_id: ChainId,
            contract_address: Address,
            abi: AbiDescriptor,
            args: list[Any] | None = None,
            *,
            auth_token: str | None = None,
    ) -> ContractCallResponse:
        """Call a smart contract read method."""
        req = CallRequest(chain_id=chain_id, contract_address=contract_address, abi=abi, args=args)
        return await self._engine.execute(CALL_PATH, req.to_payload(), auth_token=auth_token)

    async def resolve_metadata(
            self,
            pointer: str,
            protocol_id: MetadataProtocolId | None = None,
            *,
            auth_token: str | None = None,
    ) -> Any:
        """Resolve off-chain metadata."""
        req = MetadataRequest(pointer=pointer, protocol_id=protocol_id)
        return await self._engine.execute(METADATA_PATH, req.to_payload(), auth_token=auth_token)
