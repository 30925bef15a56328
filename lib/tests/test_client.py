from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from spec_rpc_client import ClientConfig, RequestError, SpecRpcClient
from spec_rpc_client import config_types
from spec_rpc_client.models import AbiItemStateMutability, AbiItemType

BALANCE_OF = {
    "name": "balanceOf",
    "type": AbiItemType.FUNCTION,
    "stateMutability": AbiItemStateMutability.VIEW,
    "inputs": [{"name": "owner", "type": "address"}],
    "outputs": [{"name": "", "type": "uint256"}],
}


def _recording_client(status: int, body: dict, **cfg):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body)

    cfg.setdefault("origin", "https://rpc.example")
    client = SpecRpcClient(ClientConfig(**cfg), transport=httpx.MockTransport(handler))
    return client, seen


def test_call_posts_contract_call_and_returns_data() -> None:
    client, seen = _recording_client(200, {"data": {"outputs": {"x": 1}, "outputArgs": [1]}, "error": None})

    result = asyncio.run(client.call("1", "0xabc", BALANCE_OF, ["0xowner"]))

    assert result == {"outputs": {"x": 1}, "outputArgs": [1]}
    assert len(seen) == 1
    assert str(seen[0].url) == "https://rpc.example/call"
    body = json.loads(seen[0].content)
    assert body == {
        "chainId": "1",
        "contractAddress": "0xabc",
        "abi": {
            "name": "balanceOf",
            "type": "function",
            "stateMutability": "view",
            "inputs": [{"name": "owner", "type": "address"}],
            "outputs": [{"name": "", "type": "uint256"}],
        },
        "args": ["0xowner"],
    }


def test_call_accepts_signature_string_and_omits_missing_args() -> None:
    client, seen = _recording_client(200, {"data": {"outputs": {}, "outputArgs": []}})

    asyncio.run(client.call("137", "0xdef", "function totalSupply() view returns (uint256)"))

    body = json.loads(seen[0].content)
    assert body["abi"] == "function totalSupply() view returns (uint256)"
    assert "args" not in body


def test_resolve_metadata_posts_pointer_and_protocol() -> None:
    client, seen = _recording_client(200, {"data": {"name": "Token #1"}})

    result = asyncio.run(client.resolve_metadata("ipfs://Qm123", 1))

    assert result == {"name": "Token #1"}
    assert str(seen[0].url) == "https://rpc.example/metadata"
    assert json.loads(seen[0].content) == {"pointer": "ipfs://Qm123", "protocolId": 1}


def test_resolve_metadata_omits_missing_protocol() -> None:
    client, seen = _recording_client(200, {"data": None})

    asyncio.run(client.resolve_metadata("ar://abc"))

    assert json.loads(seen[0].content) == {"pointer": "ar://abc"}


def test_per_call_token_overrides_configured_token() -> None:
    client, seen = _recording_client(200, {"data": None}, auth_token="configured")

    asyncio.run(client.resolve_metadata("p"))
    asyncio.run(client.resolve_metadata("p", auth_token="per-call"))

    assert seen[0].headers[config_types.AUTH_HEADER_NAME] == "configured"
    assert seen[1].headers[config_types.AUTH_HEADER_NAME] == "per-call"


def test_errors_propagate_unmodified() -> None:
    client, seen = _recording_client(
        404,
        {"error": {"message": "contract not found", "code": "NOT_FOUND"}},
        max_error_retries=1,
    )

    with pytest.raises(RequestError) as exc:
        asyncio.run(client.call("1", "0xabc", BALANCE_OF))

    assert exc.value.message == "contract not found"
    assert exc.value.code == "NOT_FOUND"
    assert len(seen) == 2


def test_client_resolves_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv(config_types.ENV_ORIGIN, "rpc.example/")
    monkeypatch.setenv(config_types.ENV_AUTH_TOKEN, "env-token")

    client = SpecRpcClient()

    assert client.call_url == "https://rpc.example/call"
    assert client.metadata_url == "https://rpc.example/metadata"
    assert client.config.auth_token == "env-token"


def test_client_keyword_overrides_win_over_env(monkeypatch) -> None:
    monkeypatch.setenv(config_types.ENV_ORIGIN, "https://env.example")

    client = SpecRpcClient(origin="http://localhost:8545", auth_token="arg-token")

    assert client.call_url == "http://localhost:8545/call"
    assert client.config.auth_token == "arg-token"
