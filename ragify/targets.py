# =============================================================================
# ragify/targets.py - RAG Target Table
# =============================================================================
# Named documentation sources for the combine-files tool. Each target says
# which repository to fetch and which files to keep.
#
# Adding a source means adding an entry to _TARGETS; there is no
# registration API and entries are never modified at runtime.
#
# Usage:
#   from ragify.targets import get_target
#   target = get_target("discord")
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class UnknownTargetError(KeyError):
    """Raised when a target name is not in the table."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No configuration found for target: {self.name}"


@dataclass(frozen=True)
class Target:
    """
    A documentation source repository and its file-selection rules.

    Attributes:
        repo_url: HTTPS URL of the Git repository
        file_extensions: Extensions to keep, without the leading dot
        include_folders: A file is kept only if its path contains one of these
        exclude_folders: A file is dropped if its path contains one of these
    """
    repo_url: str
    file_extensions: tuple[str, ...]
    include_folders: tuple[str, ...]
    exclude_folders: tuple[str, ...]


_TARGETS = {
    "discord": Target(
        repo_url="https://github.com/discordjs/discord.js",
        file_extensions=("ts",),
        include_folders=("builders",),
        exclude_folders=(),
    ),
    "elysia": Target(
        repo_url="https://github.com/elysiajs/documentation",
        file_extensions=("md",),
        include_folders=("docs",),
        exclude_folders=("public", ".vitepress", "blog"),
    ),
}

# Read-only view of the table
TARGETS: Mapping[str, Target] = MappingProxyType(_TARGETS)


def get_target(name: str) -> Target:
    """
    Look up a target by name.

    Raises:
        UnknownTargetError: If no target has that name
    """
    try:
        return TARGETS[name]
    except KeyError:
        raise UnknownTargetError(name) from None
