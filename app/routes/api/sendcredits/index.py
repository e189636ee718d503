# =============================================================================
# app/routes/api/sendcredits/index.py - Send Credits Action Endpoints
# =============================================================================
# GET  /api/sendcredits           -> action card with absolute links
# GET  /api/sendcredits/{amount}  -> card for one fixed amount
# POST /api/sendcredits/{amount}  -> unsigned USDC transfer for {account}
#
# Links are built from the configured base path (see Settings.base_path).
# =============================================================================

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Path as PathParam

from app.dependencies import AppContext, ContextDep
from app.exceptions import InvalidAmountError
from core.models.action import (
    ActionGetResponse,
    ActionPostRequest,
    ActionPostResponse,
    AmountActionResponse,
)
from core.services.action_service import (
    SEND_CREDITS_PATH,
    build_amount_action,
    build_send_credits_action,
    parse_amount,
)
from core.services.transfer_service import (
    build_transfer_transaction,
    fetch_latest_blockhash,
    parse_account,
)

router = APIRouter(tags=["donation"])

AmountParam = Annotated[str, PathParam(description="USDC amount")]


def _checked_amount(ctx: AppContext, amount: str) -> Decimal:
    try:
        return parse_amount(amount)
    except ValueError:
        ctx.logger.warn({"amount": amount}, "Rejected send credits amount")
        raise InvalidAmountError(amount)


@router.get("", response_model=ActionGetResponse, response_model_exclude_none=True)
async def get_send_credits(ctx: ContextDep):
    """
    Send Credits action card.

    Each preset button links to /api/sendcredits/<amount> on the public host.
    """
    base_url = f"{ctx.env.base_path}{SEND_CREDITS_PATH}"
    return build_send_credits_action(lambda amount: f"{base_url}/{amount}")


@router.get("/{amount}", response_model=AmountActionResponse)
async def get_send_credits_amount(amount: AmountParam, ctx: ContextDep):
    """
    Card for a single amount.

    Rejects amounts that are not positive numbers.
    """
    _checked_amount(ctx, amount)
    return build_amount_action(amount)


@router.post("/{amount}", response_model=ActionPostResponse)
async def post_send_credits_amount(
    amount: AmountParam,
    body: ActionPostRequest,
    ctx: ContextDep,
):
    """
    Build the transfer the wallet signs.

    The posted account pays the fees and sends `amount` USDC to the
    donation recipient. The transaction is returned unsigned.
    """
    value = _checked_amount(ctx, amount)
    payer = parse_account(body.account)
    ctx.logger.info({"amount": amount, "account": body.account}, "Building send credits transaction")

    blockhash = await fetch_latest_blockhash(ctx.env.RPC_URL)
    return ActionPostResponse(transaction=build_transfer_transaction(payer, value, blockhash))
