# =============================================================================
# core/services/transfer_service.py - USDC Transfer Transactions
# =============================================================================
# Builds the unsigned transaction a wallet signs when a send credits button
# is pressed: one SPL Token `transferChecked` moving USDC from the payer's
# associated token account to the recipient's.
#
# The payer is also the fee payer; the returned transaction carries empty
# signature slots and is base64-encoded for the Actions POST response.
#
# Usage:
#   blockhash = await fetch_latest_blockhash(settings.RPC_URL)
#   encoded = build_transfer_transaction(payer, Decimal("5"), blockhash)
# =============================================================================

import base64
from decimal import ROUND_FLOOR, Decimal

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address, transfer_checked
from spl.token.models import TransferCheckedParams

from app.exceptions import InvalidAccountError, InvalidAmountError, RpcUnavailableError
from core.services.action_service import RECIPIENT_ADDRESS

# USDC mint on Solana mainnet
USDC_MINT = Pubkey.from_string("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")
USDC_DECIMALS = 6


def parse_account(account: str) -> Pubkey:
    """
    Parse the paying wallet from an Actions POST body.

    Raises:
        InvalidAccountError: If account is not a base58 public key
    """
    try:
        return Pubkey.from_string(account)
    except ValueError:
        raise InvalidAccountError(account) from None


def to_base_units(amount: Decimal) -> int:
    """
    Convert a USDC amount to token base units, rounding down.

    Example:
        to_base_units(Decimal("12.5"))  # 12500000
    """
    scaled = amount.scaleb(USDC_DECIMALS).to_integral_value(rounding=ROUND_FLOOR)
    return int(scaled)


def build_transfer_transaction(payer: Pubkey, amount: Decimal, blockhash: Hash) -> str:
    """
    Build an unsigned USDC transfer from payer to the donation recipient.

    Args:
        payer: Wallet that signs, pays fees and owns the source account
        amount: USDC amount (already validated as positive)
        blockhash: Recent blockhash the transaction is bound to

    Returns:
        The serialized transaction, base64-encoded

    Raises:
        InvalidAmountError: If the amount is below one base unit
    """
    units = to_base_units(amount)
    if units <= 0:
        raise InvalidAmountError(str(amount))

    recipient = Pubkey.from_string(RECIPIENT_ADDRESS)
    instruction = transfer_checked(
        TransferCheckedParams(
            program_id=TOKEN_PROGRAM_ID,
            source=get_associated_token_address(payer, USDC_MINT),
            mint=USDC_MINT,
            dest=get_associated_token_address(recipient, USDC_MINT),
            owner=payer,
            amount=units,
            decimals=USDC_DECIMALS,
        )
    )

    message = Message.new_with_blockhash([instruction], payer, blockhash)
    transaction = Transaction.new_unsigned(message)
    return base64.b64encode(bytes(transaction)).decode("ascii")


async def fetch_latest_blockhash(rpc_url: str) -> Hash:
    """
    Ask the RPC node for the latest blockhash.

    Raises:
        RpcUnavailableError: If the node cannot be reached or answers with an error
    """
    try:
        async with AsyncClient(rpc_url) as client:
            response = await client.get_latest_blockhash()
    except (SolanaRpcException, RPCException) as e:
        raise RpcUnavailableError(str(e)) from e
    return response.value.blockhash
