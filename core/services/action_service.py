# =============================================================================
# core/services/action_service.py - Blink Action Builders
# =============================================================================
# Builds the action cards served by the blink and sendcredits routes and
# the /actions.json rules document. Link targets are computed from the
# configured base path so the same code serves localhost and production.
#
# Usage:
#   card = build_send_credits_action(lambda amount: f"/pay?amount={amount}")
# =============================================================================

from decimal import Decimal, InvalidOperation
from typing import Callable

from core.models.action import (
    ActionGetResponse,
    ActionLinks,
    ActionMetadata,
    ActionParameter,
    ActionRule,
    ActionsJson,
    AmountActionResponse,
    LinkedAction,
)

ICON_URL = "https://shdw-drive.genesysgo.net/8Aa59VQz3JtP7LNL3wfmLyhNgtvcRsG1vvR7NPMw1GVN/triblink.webp"
TITLE = "supports tribixbite's Solana endeavors"
RECIPIENT_ADDRESS = "triQem2gDXHXweNceTKWGfDfN6AnpCHmjR745LXcbix"

# Fixed buttons; the custom button takes its amount from user input
PRESET_AMOUNTS = ("5", "20", "100")
CUSTOM_AMOUNT_PLACEHOLDER = "{amount}"

SEND_CREDITS_PATH = "/api/sendcredits"
SEND_CREDITS_PATH_PATTERN = "/sendcredits"


def build_send_credits_action(href_for: Callable[[str], str]) -> ActionGetResponse:
    """
    Build the "Send Credits" action card.

    Args:
        href_for: Maps an amount (or the {amount} placeholder) to a link target

    Returns:
        ActionGetResponse with one button per preset amount plus a custom one
    """
    actions = [
        LinkedAction(label=f"Send ${amount}", href=href_for(amount))
        for amount in PRESET_AMOUNTS
    ]
    actions.append(
        LinkedAction(
            label="Custom Donation",
            href=href_for(CUSTOM_AMOUNT_PLACEHOLDER),
            parameters=[ActionParameter(name="amount", label="USDC amount")],
        )
    )

    return ActionGetResponse(
        icon=ICON_URL,
        label="Send Credits",
        title=TITLE,
        description="Choose an amount to in USDC.",
        links=ActionLinks(actions=actions),
        metadata=ActionMetadata(recipient=RECIPIENT_ADDRESS),
    )


def parse_amount(amount: str) -> Decimal:
    """
    Parse a USDC amount from a path segment.

    Returns:
        The amount as a Decimal

    Raises:
        ValueError: If the amount is not a finite positive number
    """
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise ValueError(f"not a number: {amount}") from e
    if not value.is_finite() or value <= 0:
        raise ValueError(f"not a positive amount: {amount}")
    return value


def build_amount_action(amount: str) -> AmountActionResponse:
    """Build the card for a single fixed amount."""
    return AmountActionResponse(
        icon=ICON_URL,
        label=f"Send ${amount}",
        title=TITLE,
        description=f"Send {amount} USDC to support the cause.",
    )


def build_actions_json(base_path: str) -> ActionsJson:
    """
    Build the /actions.json rules document.

    Example:
        build_actions_json("https://shinyspells.com").rules[0].apiPath
        # "https://shinyspells.com/api/sendcredits"
    """
    return ActionsJson(
        rules=[
            ActionRule(
                pathPattern=SEND_CREDITS_PATH_PATTERN,
                apiPath=f"{base_path}{SEND_CREDITS_PATH}",
            )
        ]
    )
