"""Environment-sourced configuration"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .client import DEFAULT_GATEWAY_HOST, parse_cluster
from .errors import InvalidConfigError
from .types import Cluster, DeliveryMethod


def _env(environ: Mapping[str, str], name: str, fallback: Optional[str] = None) -> str:
    value = environ.get(name) or fallback
    if value is None:
        raise InvalidConfigError(f"Missing required env: {name}")
    return value


@dataclass(frozen=True)
class GatewayConfig:
    """Settings read once at process start.

    Variables:
        GATEWAY_API_KEY          API key from the gateway dashboard (required)
        GATEWAY_CLUSTER          devnet | mainnet (default: devnet)
        DELIVERY_METHOD          rpc | jito | sanctum-sender | helius-sender (default: rpc)
        SENDER_SECRET_KEY_JSON   '[<64 numbers>]' from solana-keygen (required)
        RECIPIENT_ADDRESS        base58 address; self-transfer when unset
        GATEWAY_HOST             gateway host override
    """

    api_key: str
    secret_key_json: str
    cluster: Cluster = Cluster.DEVNET
    delivery_method: DeliveryMethod = DeliveryMethod.RPC
    recipient_address: Optional[str] = None
    host: str = DEFAULT_GATEWAY_HOST

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        """Load configuration from the environment"""
        if environ is None:
            environ = os.environ

        delivery_method = _env(environ, "DELIVERY_METHOD", DeliveryMethod.RPC.value)
        try:
            method = DeliveryMethod(delivery_method)
        except ValueError:
            valid = ", ".join(m.value for m in DeliveryMethod)
            raise InvalidConfigError(
                f"unknown delivery method {delivery_method!r} (expected one of: {valid})"
            )

        return cls(
            api_key=_env(environ, "GATEWAY_API_KEY"),
            secret_key_json=_env(environ, "SENDER_SECRET_KEY_JSON"),
            cluster=parse_cluster(_env(environ, "GATEWAY_CLUSTER", Cluster.DEVNET.value)),
            delivery_method=method,
            recipient_address=environ.get("RECIPIENT_ADDRESS") or None,
            host=_env(environ, "GATEWAY_HOST", DEFAULT_GATEWAY_HOST),
        )
