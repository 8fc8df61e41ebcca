"""HTTP transport for the gateway JSON-RPC endpoint"""

from typing import Any, List, Optional

import requests

from . import codec
from .errors import GatewayHttpError, GatewayRpcError, NetworkError


class GatewayTransport:
    """Performs one POST per call and classifies the outcome.

    Failures are checked in order: the request never completing
    (:class:`NetworkError`), a non-2xx status (:class:`GatewayHttpError`), a
    body that is not an envelope (:class:`MalformedResponseError`), and an
    error object inside the envelope (:class:`GatewayRpcError`). Otherwise the
    envelope's ``result`` is returned untouched. Nothing is retried.
    """

    def __init__(
        self,
        endpoint: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def call(self, method: str, params: List[Any]) -> Any:
        """Send ``method`` with positional ``params`` and return the result payload"""
        body = codec.encode_request(method, params)
        try:
            response = self.session.post(self.endpoint, data=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

        status = response.status_code
        text = response.text
        if not (status >= 200 and status < 300):
            raise GatewayHttpError(status, text)

        envelope = codec.decode_response(text, status=status)
        if envelope.error is not None:
            raise GatewayRpcError(envelope.error.code, envelope.error.message)
        return envelope.result
