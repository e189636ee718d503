# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - action.py: Solana Actions cards and the actions.json rules document
#
# These models define the "contract" between API and clients.
# =============================================================================

from .action import (
    ActionGetResponse,
    ActionLinks,
    ActionMetadata,
    ActionParameter,
    ActionPostRequest,
    ActionPostResponse,
    ActionRule,
    ActionsJson,
    AmountActionResponse,
    LinkedAction,
)

__all__ = [
    "ActionGetResponse",
    "ActionLinks",
    "ActionMetadata",
    "ActionParameter",
    "ActionPostRequest",
    "ActionPostResponse",
    "ActionRule",
    "ActionsJson",
    "AmountActionResponse",
    "LinkedAction",
]
