"""Request value objects and the wire shapes of the two endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, TypedDict, Union

ChainId = str
Address = str
MetadataProtocolId = int


class AbiItemType(str, Enum):
    FUNCTION = "function"
    EVENT = "event"
    CONSTRUCTOR = "constructor"


class AbiItemStateMutability(str, Enum):
    PAYABLE = "payable"
    NON_PAYABLE = "nonpayable"
    VIEW = "view"


class _AbiItemInputRequired(TypedDict):
    type: str


class AbiItemInput(_AbiItemInputRequired, total=False):
    name: str
    indexed: bool
    internalType: str


class AbiItemOutput(TypedDict):
    name: str
    type: str


class _AbiItemRequired(TypedDict):
    name: str
    type: str          # AbiItemType value
    inputs: List[AbiItemInput]


class AbiItem(_AbiItemRequired, total=False):
    signature: str
    constant: bool
    outputs: List[AbiItemOutput]
    payable: bool
    stateMutability: str   # AbiItemStateMutability value
    anonymous: bool


Abi = List[AbiItem]

# A descriptor is either a full ABI item or a plain signature string.
AbiDescriptor = Union[AbiItem, str]


class ContractCallResponse(TypedDict):
    outputs: dict
    outputArgs: List[Any]


class ErrorPayload(TypedDict, total=False):
    message: str
    code: Any


class ResponseEnvelope(TypedDict, total=False):
    data: Any
    error: Optional[ErrorPayload]


@dataclass(frozen=True)
class CallRequest:
    chain_id: ChainId
    contract_address: Address
    abi: AbiDescriptor
    args: Optional[List[Any]] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "chainId": self.chain_id,
            "contractAddress": self.contract_address,
            "abi": _plain(self.abi),
        }
        if self.args is not None:
            payload["args"] = list(self.args)
        return payload


@dataclass(frozen=True)
class MetadataRequest:
    pointer: str
    protocol_id: Optional[MetadataProtocolId] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"pointer": self.pointer}
        if self.protocol_id is not None:
            payload["protocolId"] = self.protocol_id
        return payload


def _plain(value: Any) -> Any:
    # Enum members inside a caller-built ABI item serialize as their values.
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
