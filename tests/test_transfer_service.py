# =============================================================================
# tests/test_transfer_service.py - USDC Transfer Tests
# =============================================================================
# This module contains tests for:
# - Account parsing and base-unit conversion
# - The unsigned transferChecked transaction
# - Blockhash lookup through the (faked) RPC client
# =============================================================================

import asyncio
import base64
from decimal import Decimal

import pytest
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address

from app.exceptions import InvalidAccountError, InvalidAmountError, RpcUnavailableError
from core.services.action_service import RECIPIENT_ADDRESS
from core.services.transfer_service import (
    USDC_MINT,
    build_transfer_transaction,
    fetch_latest_blockhash,
    parse_account,
    to_base_units,
)

TRANSFER_CHECKED = 12


def decode(encoded: str) -> Transaction:
    return Transaction.from_bytes(base64.b64decode(encoded))


class TestParsing:
    """Test parse_account and to_base_units."""

    def test_account(self):
        payer = Pubkey.new_unique()
        assert parse_account(str(payer)) == payer

    @pytest.mark.parametrize("account", ["", "not-a-key", "0x1234"])
    def test_invalid_account(self, account):
        with pytest.raises(InvalidAccountError) as exc_info:
            parse_account(account)

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"account": account}

    @pytest.mark.parametrize("amount, units", [
        ("5", 5_000_000),
        ("12.5", 12_500_000),
        ("0.0000019", 1),
    ])
    def test_base_units_round_down(self, amount, units):
        assert to_base_units(Decimal(amount)) == units


class TestBuildTransferTransaction:
    """Test the serialized transaction."""

    def test_transfer_checked_to_recipient(self):
        payer = Pubkey.new_unique()
        blockhash = Hash.new_unique()

        transaction = decode(build_transfer_transaction(payer, Decimal("20"), blockhash))
        message = transaction.message
        instruction = message.instructions[0]

        assert len(message.instructions) == 1
        assert message.recent_blockhash == blockhash
        assert message.account_keys[0] == payer
        assert message.header.num_required_signatures == 1
        assert message.account_keys[instruction.program_id_index] == TOKEN_PROGRAM_ID
        assert [message.account_keys[i] for i in instruction.accounts] == [
            get_associated_token_address(payer, USDC_MINT),
            USDC_MINT,
            get_associated_token_address(Pubkey.from_string(RECIPIENT_ADDRESS), USDC_MINT),
            payer,
        ]
        assert bytes(instruction.data) == bytes([TRANSFER_CHECKED]) + (20_000_000).to_bytes(8, "little") + bytes([6])

    def test_left_unsigned(self):
        transaction = decode(build_transfer_transaction(Pubkey.new_unique(), Decimal("5"), Hash.new_unique()))

        assert transaction.signatures == [Signature.default()]

    def test_amount_below_one_unit(self):
        with pytest.raises(InvalidAmountError):
            build_transfer_transaction(Pubkey.new_unique(), Decimal("0.0000001"), Hash.new_unique())


class TestFetchLatestBlockhash:
    """Test fetch_latest_blockhash against the fake RPC client."""

    def test_returns_blockhash(self, rpc):
        blockhash = asyncio.run(fetch_latest_blockhash("https://rpc.example"))

        assert blockhash == rpc.blockhash
        assert rpc.endpoints == ["https://rpc.example"]

    def test_rpc_error(self, rpc):
        rpc.error = RPCException("node is behind")

        with pytest.raises(RpcUnavailableError) as exc_info:
            asyncio.run(fetch_latest_blockhash("https://rpc.example"))

        assert exc_info.value.status_code == 502
        assert "node is behind" in exc_info.value.details["error"]
