"""Exception classes for the Gateway SDK"""

from typing import Optional

NO_DELIVERY_METHODS_MESSAGE = "No delivery methods found"


class SdkError(Exception):
    """Base SDK error"""

    pass


class GatewayError(SdkError):
    """Classified failure reported while talking to the gateway.

    Transport-level failures carry ``status`` and ``detail`` (the raw body);
    protocol-level failures carry ``code`` and ``message``.
    """

    def __init__(
        self,
        text: str,
        status: Optional[int] = None,
        code: Optional[int] = None,
        message: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.status = status
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(text)


class GatewayHttpError(GatewayError):
    """Non-success HTTP status from the gateway"""

    def __init__(self, status: int, body: str):
        super().__init__(
            f"Gateway HTTP error {status}: {body}", status=status, detail=body
        )


class MalformedResponseError(GatewayHttpError):
    """Response body is not a well-formed envelope"""

    def __init__(self, status: int, body: str, reason: str):
        self.reason = reason
        GatewayError.__init__(
            self,
            f"Gateway HTTP error {status}: malformed response ({reason}): {body}",
            status=status,
            detail=body,
        )


class GatewayRpcError(GatewayError):
    """Error object returned inside a well-formed envelope"""

    def __init__(self, code: int, message: str):
        super().__init__(
            f"Gateway RPC error {code}: {message}", code=code, message=message
        )


class DeliveryRouteError(GatewayRpcError):
    """No delivery method is linked to the project for the cluster"""

    def __init__(self, code: int, message: str, remediation: str):
        self.remediation = remediation
        GatewayError.__init__(
            self,
            f"Gateway RPC error {code}: {message}\n{remediation}",
            code=code,
            message=message,
        )


class NetworkError(GatewayError):
    """Network-related error"""

    def __init__(self, message: str):
        super().__init__(f"Network error: {message}", detail=message)


class GatewayResponseError(GatewayError):
    """Result payload does not match the shape the method expects"""

    def __init__(self, method: str, reason: str):
        self.method = method
        super().__init__(f"Unexpected {method} result: {reason}", detail=reason)


class TransactionDecodeError(SdkError):
    """Transaction bytes could not be decoded"""

    def __init__(self, message: str):
        super().__init__(f"Transaction decode failed: {message}")


class InvalidSignatureError(SdkError):
    """Invalid signature error"""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        if reason:
            super().__init__(f"Invalid signature: {reason}")
        else:
            super().__init__("Invalid signature")


class InvalidConfigError(SdkError):
    """Invalid configuration error"""

    def __init__(self, message: str):
        super().__init__(f"Invalid configuration: {message}")


def is_no_delivery_method_error(err: BaseException) -> bool:
    """True when a protocol error reports that no delivery route is configured"""
    if not isinstance(err, GatewayRpcError):
        return False
    return NO_DELIVERY_METHODS_MESSAGE in (err.message or "")
