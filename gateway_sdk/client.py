"""Client for the transaction-delivery gateway"""

from typing import List, Optional, Union
from urllib.parse import quote

import requests

from .errors import GatewayResponseError, InvalidConfigError
from .transport import GatewayTransport
from .types import (
    BuildOptions,
    BuiltTransaction,
    Cluster,
    DeliveryMethod,
    Encoding,
    JitoTipRange,
    SendOptions,
    TipInstruction,
    TipInstructionsRequest,
)

DEFAULT_GATEWAY_HOST = "tpg.sanctum.so"


def parse_cluster(cluster: Union[Cluster, str]) -> Cluster:
    """Coerce a cluster tag into :class:`Cluster`"""
    try:
        return Cluster(cluster)
    except ValueError:
        valid = ", ".join(c.value for c in Cluster)
        raise InvalidConfigError(f"unknown cluster {cluster!r} (expected one of: {valid})")


def gateway_endpoint(
    api_key: str, cluster: Union[Cluster, str], host: str = DEFAULT_GATEWAY_HOST
) -> str:
    """Derive the endpoint URL for an (api_key, cluster) pair"""
    cluster = parse_cluster(cluster)
    return f"https://{host}/v1/{cluster.value}?apiKey={quote(api_key, safe='')}"


class GatewayClient:
    """Main client for the gateway.

    Holds only immutable configuration; every call is an independent
    request/response exchange, so one client can be shared across threads.

    Example::

        client = GatewayClient("my-api-key", Cluster.DEVNET)
        built = client.build_gateway_transaction(
            unsigned_b64, BuildOptions(encoding=Encoding.BASE64)
        )
    """

    def __init__(
        self,
        api_key: str,
        cluster: Union[Cluster, str],
        session: Optional[requests.Session] = None,
        host: str = DEFAULT_GATEWAY_HOST,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise InvalidConfigError("API key must not be empty")
        self._api_key = api_key
        self._cluster = parse_cluster(cluster)
        self._endpoint = gateway_endpoint(api_key, self._cluster, host)
        self._transport = GatewayTransport(self._endpoint, session=session, timeout=timeout)

    @property
    def cluster(self) -> Cluster:
        return self._cluster

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def build_gateway_transaction(
        self, encoded_unsigned_tx: str, options: Optional[BuildOptions] = None
    ) -> BuiltTransaction:
        """Submit an unsigned transaction for enrichment.

        The gateway may attach compute-budget and priority-fee instructions
        and rebinds the blockhash; the returned transaction must be signed as
        received.
        """
        params = (options or BuildOptions()).to_params()
        result = self._transport.call(
            "buildGatewayTransaction", [encoded_unsigned_tx, params]
        )
        return BuiltTransaction.from_dict(result)

    def get_tip_instructions(
        self,
        fee_payer: str,
        delivery_method: Optional[DeliveryMethod] = None,
        jito_tip_range: Optional[JitoTipRange] = None,
    ) -> List[TipInstruction]:
        """Get the tip instructions required for a delivery route.

        The caller must add these to the transaction itself; sendTransaction
        does not inject them.
        """
        request = TipInstructionsRequest(
            fee_payer=fee_payer,
            jito_tip_range=jito_tip_range,
            delivery_method_type=delivery_method,
        )
        result = self._transport.call("getTipInstructions", [request.to_params()])
        if not isinstance(result, list):
            raise GatewayResponseError(
                "getTipInstructions", f"expected a list, got {type(result).__name__}"
            )
        return [TipInstruction.from_dict(ix) for ix in result]

    def send_transaction(
        self, encoded_signed_tx: str, options: Optional[SendOptions] = None
    ) -> str:
        """Submit a signed transaction for delivery and return its signature"""
        if options is None:
            options = SendOptions(encoding=Encoding.BASE64)
        result = self._transport.call(
            "sendTransaction", [encoded_signed_tx, options.to_params()]
        )
        if not isinstance(result, str):
            raise GatewayResponseError(
                "sendTransaction", f"expected a signature string, got {type(result).__name__}"
            )
        return result


def create_gateway_client(
    api_key: str, cluster: Union[Cluster, str], **kwargs
) -> GatewayClient:
    """Create a client for one (api_key, cluster) pair"""
    return GatewayClient(api_key, cluster, **kwargs)
