"""JSON-RPC envelope encoding and decoding for the gateway wire protocol"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import MalformedResponseError

REQUEST_ID = "sanctum-integration"
JSONRPC_VERSION = "2.0"


@dataclass
class RpcRequest:
    """Request envelope"""

    method: str
    params: List[Any] = field(default_factory=list)
    id: str = REQUEST_ID
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the wire"""
        return {
            "id": self.id,
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "RpcRequest":
        """Create from dictionary"""
        return RpcRequest(
            method=data["method"],
            params=list(data.get("params", [])),
            id=data.get("id", REQUEST_ID),
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
        )


@dataclass
class RpcErrorObject:
    """Protocol error carried in a response envelope"""

    code: int
    message: str


@dataclass
class RpcResponse:
    """Response envelope"""

    result: Any = None
    error: Optional[RpcErrorObject] = None


def encode_request(method: str, params: List[Any]) -> str:
    """Serialize a request envelope. Params are sent verbatim, in order."""
    return json.dumps(RpcRequest(method=method, params=list(params)).to_dict())


def decode_request(body: str) -> RpcRequest:
    """Parse a request envelope produced by :func:`encode_request`"""
    data = json.loads(body)
    if not isinstance(data, dict) or not isinstance(data.get("method"), str):
        raise ValueError("request envelope must be an object with a method")
    if not isinstance(data.get("params", []), list):
        raise ValueError("request params must be a list")
    return RpcRequest.from_dict(data)


def decode_response(body: str, status: int = 200) -> RpcResponse:
    """Parse a response envelope.

    Anything other than an object carrying either a non-null ``error`` of
    shape ``{code: int, message: str}`` or a ``result`` key is rejected as a
    :class:`MalformedResponseError`.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise MalformedResponseError(status, body, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(status, body, "envelope is not an object")

    error = data.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise MalformedResponseError(status, body, "error is not an object")
        code = error.get("code")
        message = error.get("message")
        # bool is an int subclass
        if not isinstance(code, int) or isinstance(code, bool):
            raise MalformedResponseError(status, body, "error code is not an integer")
        if not isinstance(message, str):
            raise MalformedResponseError(status, body, "error message is not a string")
        return RpcResponse(error=RpcErrorObject(code=code, message=message))

    if "result" not in data:
        raise MalformedResponseError(status, body, "missing result")
    return RpcResponse(result=data["result"])


def encode_bytes(data: bytes) -> Dict[str, int]:
    """Encode bytes as a keyed numeric object: b"\\x0a\\x14" -> {"0": 10, "1": 20}"""
    return {str(i): b for i, b in enumerate(data)}


def decode_bytes(data: Optional[Mapping[str, Any]]) -> bytes:
    """Rebuild bytes from a keyed numeric object, reading keys in ascending order.

    Sparse or unordered maps are accepted; non-integer keys, keys naming the
    same index twice ("1" and "01") and values outside 0..255 raise
    ``ValueError``.
    """
    if data is None:
        return b""
    if not isinstance(data, Mapping):
        raise ValueError("byte payload must be an object keyed by index")

    indexed = {}
    for key, value in data.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            raise ValueError(f"byte payload key {key!r} is not an integer")
        if index < 0:
            raise ValueError(f"byte payload key {key!r} is negative")
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
            raise ValueError(f"byte payload value {value!r} at {key!r} is not a byte")
        if index in indexed:
            raise ValueError(f"byte payload key {key!r} repeats index {index}")
        indexed[index] = value

    return bytes(indexed[index] for index in sorted(indexed))
