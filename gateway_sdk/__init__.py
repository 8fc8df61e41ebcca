"""
Gateway SDK for Python

Build, enrich, sign and deliver Solana transactions through a
transaction-delivery gateway.

- Client: buildGatewayTransaction, getTipInstructions, sendTransaction
- Pipeline: unsigned transaction -> enrichment -> local signing -> delivery
"""

from .client import (
    GatewayClient,
    create_gateway_client,
    gateway_endpoint,
    DEFAULT_GATEWAY_HOST,
)
from .config import GatewayConfig
from .pipeline import (
    DeliveryPipeline,
    DeliveryResult,
    PipelineState,
    explorer_url,
    remediation_for,
)
from .transport import GatewayTransport
from .types import (
    Cluster,
    DeliveryMethod,
    Encoding,
    CuPriceRange,
    JitoTipRange,
    AccountRole,
    BuildOptions,
    SendOptions,
    TipInstructionsRequest,
    LatestBlockhash,
    BuiltTransaction,
    TipAccountMeta,
    TipInstruction,
)
from .errors import (
    SdkError,
    GatewayError,
    GatewayHttpError,
    MalformedResponseError,
    GatewayRpcError,
    DeliveryRouteError,
    NetworkError,
    GatewayResponseError,
    TransactionDecodeError,
    InvalidSignatureError,
    InvalidConfigError,
    is_no_delivery_method_error,
)

__version__ = "0.1.0"
__all__ = [
    # Core classes
    "GatewayClient",
    "GatewayTransport",
    "GatewayConfig",
    "DeliveryPipeline",
    "DeliveryResult",
    "PipelineState",
    "create_gateway_client",
    "gateway_endpoint",
    "explorer_url",
    "remediation_for",
    "DEFAULT_GATEWAY_HOST",
    # Types
    "Cluster",
    "DeliveryMethod",
    "Encoding",
    "CuPriceRange",
    "JitoTipRange",
    "AccountRole",
    "BuildOptions",
    "SendOptions",
    "TipInstructionsRequest",
    "LatestBlockhash",
    "BuiltTransaction",
    "TipAccountMeta",
    "TipInstruction",
    # Errors
    "SdkError",
    "GatewayError",
    "GatewayHttpError",
    "MalformedResponseError",
    "GatewayRpcError",
    "DeliveryRouteError",
    "NetworkError",
    "GatewayResponseError",
    "TransactionDecodeError",
    "InvalidSignatureError",
    "InvalidConfigError",
    "is_no_delivery_method_error",
]
