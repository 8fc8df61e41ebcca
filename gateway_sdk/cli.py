"""Send a SOL transfer through the gateway.

Usage:
    python -m gateway_sdk.cli [--amount LAMPORTS] [--tips]

Environment: see :class:`gateway_sdk.config.GatewayConfig`.
"""

import argparse
import logging
from typing import Mapping, Optional, Sequence

from solders.pubkey import Pubkey

from .client import GatewayClient
from .config import GatewayConfig
from .errors import InvalidConfigError, SdkError
from .pipeline import DeliveryPipeline
from .transaction import keypair_from_json, transfer_instruction

DEFAULT_TRANSFER_LAMPORTS = 100_000

log = logging.getLogger("gateway")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a SOL transfer via the gateway")
    parser.add_argument(
        "--amount",
        type=int,
        default=DEFAULT_TRANSFER_LAMPORTS,
        help=f"lamports to transfer (default: {DEFAULT_TRANSFER_LAMPORTS})",
    )
    parser.add_argument(
        "--tips",
        action="store_true",
        help="append the gateway's tip instructions for the delivery method",
    )
    return parser.parse_args(argv)


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    client: Optional[GatewayClient] = None,
) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[gateway] %(message)s")

    try:
        config = GatewayConfig.from_env(environ)
        signer = keypair_from_json(config.secret_key_json)
        fee_payer = signer.pubkey()

        if config.recipient_address:
            try:
                recipient = Pubkey.from_string(config.recipient_address)
            except ValueError as e:
                raise InvalidConfigError(f"invalid RECIPIENT_ADDRESS: {e}") from e
        else:
            recipient = fee_payer

        log.info(f"Fee payer address: {fee_payer}")
        log.info(f"Cluster: {config.cluster.value} Delivery method: {config.delivery_method.value}")

        if client is None:
            client = GatewayClient(config.api_key, config.cluster, host=config.host)
        log.info(f"Gateway endpoint: {client.endpoint.split('?')[0]}")

        pipeline = DeliveryPipeline(client, signer, logger=log)
        result = pipeline.deliver(
            [transfer_instruction(fee_payer, recipient, args.amount)],
            delivery_method=config.delivery_method,
            include_tip_instructions=args.tips,
        )
    except SdkError as e:
        log.error(f"ERROR: {e}")
        return 1

    log.info(f"View on Solana Explorer: {result.explorer_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
