# =============================================================================
# core/models/action.py - Blink Action Schemas
# =============================================================================
# These models define the API contract for Solana Actions ("blinks"):
# - ActionGetResponse: Metadata a wallet renders for an action
# - LinkedAction / ActionParameter: Buttons and their input fields
# - ActionsJson / ActionRule: The /actions.json routing document
# =============================================================================

from pydantic import BaseModel, Field


class ActionParameter(BaseModel):
    """
    Input field attached to a linked action.

    Example:
        {"name": "amount", "label": "USDC amount"}
    """
    name: str = Field(..., description="Placeholder name substituted into the href")
    label: str = Field(..., description="Input label shown to the user")


class LinkedAction(BaseModel):
    """
    One button in an action card.

    Example:
        {"label": "Send $5", "href": "https://shinyspells.com/api/sendcredits/5"}
    """
    label: str
    href: str
    parameters: list[ActionParameter] | None = None


class ActionLinks(BaseModel):
    """Container for the linked actions of a card."""
    actions: list[LinkedAction]


class ActionMetadata(BaseModel):
    """Extra data about the action target."""
    recipient: str = Field(..., description="Wallet address receiving the donation")


class ActionGetResponse(BaseModel):
    """
    Full action card returned by GET on an action endpoint.

    Example:
        {
            "icon": "https://.../triblink.webp",
            "label": "Send Credits",
            "title": "supports tribixbite's Solana endeavors",
            "description": "Choose an amount to in USDC.",
            "links": {"actions": [...]},
            "metadata": {"recipient": "triQem..."}
        }
    """
    icon: str
    label: str
    title: str
    description: str
    links: ActionLinks
    metadata: ActionMetadata


class AmountActionResponse(BaseModel):
    """Card for a single fixed-amount action."""
    icon: str
    label: str
    title: str
    description: str


class ActionPostRequest(BaseModel):
    """Body a wallet posts when a button is pressed."""
    account: str = Field(..., description="Base58 public key of the paying wallet")


class ActionPostResponse(BaseModel):
    """Unsigned transaction for the wallet to sign and submit."""
    transaction: str = Field(..., description="Base64-encoded serialized transaction")


class ActionRule(BaseModel):
    """
    Maps a website path to the API endpoint that serves its action.

    Field names follow the actions.json wire format.
    """
    pathPattern: str
    apiPath: str


class ActionsJson(BaseModel):
    """Body of GET /actions.json."""
    rules: list[ActionRule]
