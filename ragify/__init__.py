# =============================================================================
# ragify/ - Documentation Scraping for RAG
# =============================================================================
# This package turns Git repositories into single markdown documents that
# can be loaded into a retrieval index:
# - targets.py: Named table of repositories and file-selection rules
# - combine.py: Clone/pull a target and concatenate its selected files
#
# Run with: python -m ragify <target>
# =============================================================================

from ragify.targets import TARGETS, Target, UnknownTargetError, get_target

__all__ = [
    "TARGETS",
    "Target",
    "UnknownTargetError",
    "get_target",
]
