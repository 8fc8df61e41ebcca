"""Build, enrich, sign and deliver a transaction through the gateway.

States run in a fixed order::

    unbuilt -> enriched -> signed -> submitted -> confirmed | failed

Every transition happens at most once. Any error moves the pipeline to
``failed`` and propagates to the caller; nothing is retried and no partial
progress is kept.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Union

from solders.instruction import Instruction
from solders.keypair import Keypair

from .client import GatewayClient
from .errors import (
    DeliveryRouteError,
    GatewayRpcError,
    InvalidSignatureError,
    is_no_delivery_method_error,
)
from .transaction import (
    build_unsigned_transaction,
    decode_transaction,
    encode_transaction,
    sign_transaction,
    signers_of,
    tip_instruction_to_solders,
    verify_signatures,
)
from .types import BuildOptions, Cluster, DeliveryMethod, Encoding, JitoTipRange, SendOptions

DASHBOARD_URL = "https://gateway.sanctum.so/dashboard/delivery-methods"
EXPLORER_URL = "https://explorer.solana.com/tx"


class PipelineState(str, Enum):
    """Delivery pipeline state"""

    UNBUILT = "unbuilt"
    ENRICHED = "enriched"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a successful delivery"""

    signature: str
    cluster: Cluster
    explorer_url: str


def remediation_for(cluster: Union[Cluster, str]) -> str:
    """Operator guidance for a project with no delivery method on ``cluster``"""
    cluster = Cluster(cluster).value
    return (
        "No delivery methods are linked to your project for this cluster.\n"
        "Next steps:\n"
        "- Open Dashboard > Delivery Methods\n"
        f"- Create or select a delivery method (cluster must match: {cluster})\n"
        "- Click 'Add to Project' to link it\n"
        "- Re-run the send\n"
        f"Quick link: {DASHBOARD_URL}"
    )


def explorer_url(signature: str, cluster: Union[Cluster, str]) -> str:
    """Block explorer link for a delivered transaction"""
    cluster = Cluster(cluster)
    if cluster is Cluster.MAINNET:
        return f"{EXPLORER_URL}/{signature}"
    return f"{EXPLORER_URL}/{signature}?cluster={cluster.value}"


class DeliveryPipeline:
    """Drives one transaction from local assembly to gateway delivery"""

    def __init__(
        self,
        client: GatewayClient,
        signer: Keypair,
        logger: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.signer = signer
        self.log = logger or logging.getLogger(__name__)
        self.state = PipelineState.UNBUILT

    def deliver(
        self,
        instructions: Sequence[Instruction],
        delivery_method: Optional[DeliveryMethod] = None,
        encoding: Optional[Encoding] = None,
        build_options: Optional[BuildOptions] = None,
        include_tip_instructions: bool = False,
        jito_tip_range: Optional[JitoTipRange] = None,
    ) -> DeliveryResult:
        """Run the whole pipeline and return the delivered signature.

        ``delivery_method``, ``encoding`` and ``jito_tip_range`` override the
        matching ``build_options`` fields when given. The resolved values are
        used for every request of the delivery, tip lookup included. Encoding
        falls back to base64.
        """
        self.state = PipelineState.UNBUILT
        try:
            return self._deliver(
                list(instructions),
                delivery_method,
                encoding,
                build_options,
                include_tip_instructions,
                jito_tip_range,
            )
        except Exception:
            self.log.error("Delivery failed in state %s", self.state.value)
            self.state = PipelineState.FAILED
            raise

    @staticmethod
    def _resolve_options(
        options: BuildOptions,
        delivery_method: Optional[DeliveryMethod],
        encoding: Optional[Encoding],
        jito_tip_range: Optional[JitoTipRange],
    ) -> BuildOptions:
        if delivery_method is None:
            delivery_method = options.delivery_method_type
        if jito_tip_range is None:
            jito_tip_range = options.jito_tip_range
        if encoding is None:
            encoding = options.encoding or Encoding.BASE64
        return replace(
            options,
            encoding=Encoding(encoding),
            jito_tip_range=jito_tip_range,
            delivery_method_type=delivery_method,
        )

    def _deliver(
        self,
        instructions: List[Instruction],
        delivery_method: Optional[DeliveryMethod],
        encoding: Optional[Encoding],
        build_options: Optional[BuildOptions],
        include_tip_instructions: bool,
        jito_tip_range: Optional[JitoTipRange],
    ) -> DeliveryResult:
        fee_payer = self.signer.pubkey()
        cluster = self.client.cluster
        options = self._resolve_options(
            build_options or BuildOptions(), delivery_method, encoding, jito_tip_range
        )
        encoding = options.encoding

        if include_tip_instructions:
            tips = self.client.get_tip_instructions(
                str(fee_payer),
                delivery_method=options.delivery_method_type,
                jito_tip_range=options.jito_tip_range,
            )
            self.log.info("Adding %d tip instruction(s)", len(tips))
            instructions = instructions + [tip_instruction_to_solders(tip) for tip in tips]

        unsigned = build_unsigned_transaction(fee_payer, instructions)

        built = self.client.build_gateway_transaction(
            encode_transaction(unsigned, encoding), options
        )
        self.state = PipelineState.ENRICHED
        self.log.info(
            "Enriched transaction (blockhash %s, valid until height %s)",
            built.latest_blockhash.blockhash,
            built.latest_blockhash.last_valid_block_height,
        )

        # A decode failure means a wire-format mismatch; it is not retried.
        decoded = decode_transaction(built.transaction, encoding)
        if fee_payer not in signers_of(decoded):
            raise InvalidSignatureError(f"{fee_payer} is not a required signer")
        signed = sign_transaction(decoded, [self.signer])
        verify_signatures(signed)
        self.state = PipelineState.SIGNED
        self.log.info("Signed transaction as %s", fee_payer)

        self.state = PipelineState.SUBMITTED
        try:
            signature = self.client.send_transaction(
                encode_transaction(signed, encoding), SendOptions(encoding=encoding)
            )
        except GatewayRpcError as e:
            if is_no_delivery_method_error(e):
                remediation = remediation_for(cluster)
                self.log.error(remediation)
                raise DeliveryRouteError(e.code, e.message, remediation) from e
            raise

        self.state = PipelineState.CONFIRMED
        result = DeliveryResult(
            signature=signature,
            cluster=cluster,
            explorer_url=explorer_url(signature, cluster),
        )
        self.log.info("Sent via gateway: signature %s (cluster %s)", signature, cluster.value)
        return result
