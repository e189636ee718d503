# =============================================================================
# app/routes/blink/index.py - Blink Action Card
# =============================================================================
# Serves the "Send Credits" card with links relative to this host.
# =============================================================================

from fastapi import APIRouter

from core.models.action import ActionGetResponse
from core.services.action_service import SEND_CREDITS_PATH, build_send_credits_action

router = APIRouter(tags=["blink", "donation"])


@router.get("", response_model=ActionGetResponse, response_model_exclude_none=True)
async def get_blink():
    """Blink action definition for sending credits to tribixbite."""
    return build_send_credits_action(lambda amount: f"{SEND_CREDITS_PATH}?amount={amount}")
