# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .action_service import (
    build_actions_json,
    build_amount_action,
    build_send_credits_action,
    parse_amount,
)
from .transfer_service import (
    build_transfer_transaction,
    fetch_latest_blockhash,
    parse_account,
)

__all__ = [
    "build_actions_json",
    "build_amount_action",
    "build_send_credits_action",
    "build_transfer_transaction",
    "fetch_latest_blockhash",
    "parse_account",
    "parse_amount",
]
