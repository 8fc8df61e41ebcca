"""Transaction assembly, encoding and signing"""

import base64
import binascii
import json
from typing import List, Sequence, Union

import base58
import nacl.exceptions
import nacl.signing
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import MessageV0, to_bytes_versioned
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

from .errors import InvalidConfigError, InvalidSignatureError, TransactionDecodeError
from .types import Encoding, TipInstruction

# The gateway rebinds the lifetime, so the unsigned transaction carries a dummy one.
PLACEHOLDER_BLOCKHASH = "11111111111111111111111111111111"


def transfer_instruction(source: Pubkey, destination: Pubkey, lamports: int) -> Instruction:
    """System-program SOL transfer"""
    return transfer(
        TransferParams(from_pubkey=source, to_pubkey=destination, lamports=lamports)
    )


def build_unsigned_transaction(
    fee_payer: Pubkey,
    instructions: Sequence[Instruction],
    blockhash: str = PLACEHOLDER_BLOCKHASH,
) -> VersionedTransaction:
    """Compile a v0 transaction with empty signature slots"""
    message = MessageV0.try_compile(
        payer=fee_payer,
        instructions=list(instructions),
        address_lookup_table_accounts=[],
        recent_blockhash=Hash.from_string(blockhash),
    )
    signatures = [Signature.default()] * message.header.num_required_signatures
    return VersionedTransaction.populate(message, signatures)


def encode_transaction(
    tx: VersionedTransaction, encoding: Union[Encoding, str] = Encoding.BASE64
) -> str:
    """Serialize a transaction to its wire form in the given encoding"""
    raw = bytes(tx)
    if Encoding(encoding) is Encoding.BASE58:
        return base58.b58encode(raw).decode()
    return base64.b64encode(raw).decode()


def decode_transaction(
    data: str, encoding: Union[Encoding, str] = Encoding.BASE64
) -> VersionedTransaction:
    """Parse a wire transaction.

    Raises:
        TransactionDecodeError: the text or the bytes are not a transaction.
    """
    try:
        if Encoding(encoding) is Encoding.BASE58:
            raw = base58.b58decode(data)
        else:
            raw = base64.b64decode(data, validate=True)
    except (ValueError, binascii.Error) as e:
        raise TransactionDecodeError(f"invalid {Encoding(encoding).value} text: {e}") from e

    if not raw:
        raise TransactionDecodeError("empty transaction")
    try:
        return VersionedTransaction.from_bytes(raw)
    except Exception as e:
        raise TransactionDecodeError(str(e)) from e


def sign_transaction(
    tx: VersionedTransaction, signers: Sequence[Keypair]
) -> VersionedTransaction:
    """Sign the transaction's message as-is with every required signer"""
    try:
        return VersionedTransaction(tx.message, list(signers))
    except Exception as e:
        raise InvalidSignatureError(str(e)) from e


def verify_signatures(tx: VersionedTransaction) -> None:
    """Check each required signature against its account key"""
    message = tx.message
    required = message.header.num_required_signatures
    signed_bytes = to_bytes_versioned(message)
    if len(tx.signatures) < required:
        raise InvalidSignatureError(f"{required - len(tx.signatures)} missing signer(s)")

    for key, signature in zip(message.account_keys[:required], tx.signatures):
        verify_key = nacl.signing.VerifyKey(bytes(key))
        try:
            verify_key.verify(signed_bytes, bytes(signature))
        except nacl.exceptions.BadSignatureError as e:
            raise InvalidSignatureError(f"signature for {key} does not verify") from e


def tip_instruction_to_solders(tip: TipInstruction) -> Instruction:
    """Convert a gateway tip instruction into a solders instruction"""
    accounts = [
        AccountMeta(
            pubkey=Pubkey.from_string(account.address),
            is_signer=account.is_signer,
            is_writable=account.is_writable,
        )
        for account in tip.accounts
    ]
    return Instruction(Pubkey.from_string(tip.program_address), tip.data, accounts)


def keypair_from_json(secret_key_json: str) -> Keypair:
    """Load a keypair from a JSON array of 64 secret-key bytes"""
    try:
        parsed = json.loads(secret_key_json)
    except ValueError as e:
        raise InvalidConfigError(f"secret key is not valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise InvalidConfigError("secret key must be an array of numbers")

    for value in parsed:
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
            raise InvalidConfigError(f"secret key must contain byte values, got {value!r}")
    secret = bytes(parsed)
    if len(secret) != 64:
        raise InvalidConfigError(f"secret key must be 64 bytes, got {len(secret)}")

    try:
        return Keypair.from_bytes(secret)
    except Exception as e:
        raise InvalidConfigError(f"invalid secret key: {e}") from e


def signers_of(tx: VersionedTransaction) -> List[Pubkey]:
    """Account keys that must sign the transaction"""
    message = tx.message
    return list(message.account_keys[: message.header.num_required_signatures])
