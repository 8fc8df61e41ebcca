#!/usr/bin/env python3
"""
Gateway Send Demo

Builds a simple SOL transfer, has the gateway enrich it, signs it locally
and delivers it through the configured delivery method.

Requirements:
    export GATEWAY_API_KEY=...                 (from the gateway dashboard)
    export GATEWAY_CLUSTER=devnet|mainnet      (default: devnet)
    export SENDER_SECRET_KEY_JSON='[<64 numbers>]'
    export DELIVERY_METHOD=rpc|jito|sanctum-sender|helius-sender   (optional)
    export RECIPIENT_ADDRESS=<base58>          (optional, self-transfer otherwise)

Usage:
    python gateway_send.py [--amount LAMPORTS] [--tips]
"""

import sys

from gateway_sdk.cli import main


if __name__ == "__main__":
    sys.exit(main())
