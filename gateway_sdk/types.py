"""Type definitions for the Gateway SDK"""

from typing import Dict, Any, Optional, List, Union
from enum import Enum
from dataclasses import dataclass, field

from typing_extensions import TypedDict

from .codec import decode_bytes, encode_bytes
from .errors import GatewayResponseError


class Cluster(str, Enum):
    """Target network"""

    MAINNET = "mainnet"
    DEVNET = "devnet"


class DeliveryMethod(str, Enum):
    """Backend transport strategy used by the gateway"""

    RPC = "rpc"
    JITO = "jito"
    SANCTUM_SENDER = "sanctum-sender"
    HELIUS_SENDER = "helius-sender"


class Encoding(str, Enum):
    """Transaction wire encoding"""

    BASE64 = "base64"
    BASE58 = "base58"


class CuPriceRange(str, Enum):
    """Compute-unit price tier"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JitoTipRange(str, Enum):
    """Priority tip tier"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


class AccountRole(int, Enum):
    """Account role attached to an instruction account"""

    READONLY = 0
    WRITABLE = 1
    READONLY_SIGNER = 2
    WRITABLE_SIGNER = 3


# Wire shapes

class BuildOptionsParams(TypedDict, total=False):
    encoding: str
    skipSimulation: bool
    skipPriorityFee: bool
    cuPriceRange: str
    jitoTipRange: str
    expireInSlots: int
    deliveryMethodType: str


class SendOptionsParams(TypedDict, total=False):
    encoding: str
    startSlot: int


class TipInstructionsParams(TypedDict, total=False):
    feePayer: str
    jitoTipRange: str
    deliveryMethodType: str


def _tag(value: Union[Enum, str, None]) -> Optional[str]:
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class BuildOptions:
    """Enrichment preferences for buildGatewayTransaction.

    Every field is optional; a field left as ``None`` is omitted from the
    request so the gateway's own default applies.
    """

    encoding: Optional[Encoding] = None
    skip_simulation: Optional[bool] = None
    skip_priority_fee: Optional[bool] = None
    cu_price_range: Optional[CuPriceRange] = None
    jito_tip_range: Optional[JitoTipRange] = None
    expire_in_slots: Optional[int] = None
    delivery_method_type: Optional[DeliveryMethod] = None

    def to_params(self) -> BuildOptionsParams:
        """Convert to the wire options object"""
        params: BuildOptionsParams = {}
        if self.encoding is not None:
            params["encoding"] = _tag(self.encoding)
        if self.skip_simulation is not None:
            params["skipSimulation"] = self.skip_simulation
        if self.skip_priority_fee is not None:
            params["skipPriorityFee"] = self.skip_priority_fee
        if self.cu_price_range is not None:
            params["cuPriceRange"] = _tag(self.cu_price_range)
        if self.jito_tip_range is not None:
            params["jitoTipRange"] = _tag(self.jito_tip_range)
        if self.expire_in_slots is not None:
            params["expireInSlots"] = self.expire_in_slots
        if self.delivery_method_type is not None:
            params["deliveryMethodType"] = _tag(self.delivery_method_type)
        return params


@dataclass(frozen=True)
class SendOptions:
    """Options for sendTransaction"""

    encoding: Optional[Encoding] = None
    start_slot: Optional[int] = None

    def to_params(self) -> SendOptionsParams:
        """Convert to the wire options object"""
        params: SendOptionsParams = {}
        if self.encoding is not None:
            params["encoding"] = _tag(self.encoding)
        if self.start_slot is not None:
            params["startSlot"] = self.start_slot
        return params


@dataclass(frozen=True)
class TipInstructionsRequest:
    """Parameters for getTipInstructions"""

    fee_payer: str
    jito_tip_range: Optional[JitoTipRange] = None
    delivery_method_type: Optional[DeliveryMethod] = None

    def to_params(self) -> TipInstructionsParams:
        """Convert to the wire parameter object"""
        params: TipInstructionsParams = {"feePayer": self.fee_payer}
        if self.jito_tip_range is not None:
            params["jitoTipRange"] = _tag(self.jito_tip_range)
        if self.delivery_method_type is not None:
            params["deliveryMethodType"] = _tag(self.delivery_method_type)
        return params


def _require(data: Any, key: str, kind: Any, method: str) -> Any:
    if not isinstance(data, dict):
        raise GatewayResponseError(method, f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise GatewayResponseError(method, f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise GatewayResponseError(
            method, f"field '{key}' has type {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class LatestBlockhash:
    """Blockhash the enriched transaction is bound to"""

    blockhash: str
    last_valid_block_height: str

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "LatestBlockhash":
        """Create from dictionary"""
        method = "buildGatewayTransaction"
        height = _require(data, "lastValidBlockHeight", (str, int), method)
        return LatestBlockhash(
            blockhash=_require(data, "blockhash", str, method),
            last_valid_block_height=str(height),
        )


@dataclass(frozen=True)
class BuiltTransaction:
    """Result of buildGatewayTransaction"""

    transaction: str
    latest_blockhash: LatestBlockhash

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BuiltTransaction":
        """Create from dictionary"""
        method = "buildGatewayTransaction"
        return BuiltTransaction(
            transaction=_require(data, "transaction", str, method),
            latest_blockhash=LatestBlockhash.from_dict(
                _require(data, "latestBlockhash", dict, method)
            ),
        )


@dataclass(frozen=True)
class TipAccountMeta:
    """Account referenced by a tip instruction"""

    address: str
    role: AccountRole

    @property
    def is_signer(self) -> bool:
        return self.role in (AccountRole.READONLY_SIGNER, AccountRole.WRITABLE_SIGNER)

    @property
    def is_writable(self) -> bool:
        return self.role in (AccountRole.WRITABLE, AccountRole.WRITABLE_SIGNER)

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "role": int(self.role)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TipAccountMeta":
        """Create from dictionary"""
        method = "getTipInstructions"
        role = _require(data, "role", int, method)
        try:
            account_role = AccountRole(role)
        except ValueError:
            raise GatewayResponseError(method, f"unknown account role {role}")
        return TipAccountMeta(
            address=_require(data, "address", str, method), role=account_role
        )


@dataclass(frozen=True)
class TipInstruction:
    """Instruction the gateway requires for a delivery route"""

    program_address: str
    accounts: List[TipAccountMeta] = field(default_factory=list)
    data: bytes = b""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape, with data as a keyed numeric object"""
        return {
            "programAddress": self.program_address,
            "accounts": [account.to_dict() for account in self.accounts],
            "data": encode_bytes(self.data),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TipInstruction":
        """Create from dictionary, rebuilding data in ascending key order"""
        method = "getTipInstructions"
        program_address = _require(data, "programAddress", str, method)
        accounts = _require(data, "accounts", list, method)
        try:
            payload = decode_bytes(data.get("data"))
        except ValueError as e:
            raise GatewayResponseError(method, str(e)) from e
        return TipInstruction(
            program_address=program_address,
            accounts=[TipAccountMeta.from_dict(account) for account in accounts],
            data=payload,
        )
