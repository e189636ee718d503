# =============================================================================
# ragify/combine.py - Combine Repository Files for RAG
# =============================================================================
# Fetches a target's repository and concatenates the selected files into a
# single markdown document, one fenced block per file:
#
#   # packages/builders/src/index.ts
#
#   ```ts
#   <file content>
#   ```
#
# Output lands in <workdir>/out/<repo-name>-<YYYY-MM-DD>-<word-count>.md;
# the clone is kept in <workdir>/in/<repo-name> and pulled on later runs.
# =============================================================================

from __future__ import annotations

import os
import re
import subprocess
from datetime import date
from pathlib import Path
from typing import Callable, Sequence

from lib.logger import logger
from ragify.targets import Target

# (args, cwd, env) -> None; raises subprocess.CalledProcessError on failure
GitRunner = Callable[..., None]

_SKIPPED_DIRS = {".git"}

_WHITESPACE = re.compile(r"\s+")


class GitCommandError(RuntimeError):
    """Raised when cloning or pulling a repository fails."""

    def __init__(self, action: str, repo_url: str, error: str):
        super().__init__(f"Failed to {action} {repo_url}: {error}")
        self.action = action
        self.repo_url = repo_url
        self.error = error


def _default_runner(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> None:
    subprocess.run(
        list(args),
        cwd=str(cwd) if cwd else None,
        env=env,
        check=True,
        text=True,
        capture_output=True,
    )


def repo_name(repo_url: str) -> str:
    """
    Derive a file-system friendly name from a repository URL.

    Example:
        repo_name("https://github.com/discordjs/discord.js")  # "discordjs-discord.js"
    """
    name = repo_url.split("com/")[-1].replace(".git", "").replace("/", "-", 1)
    return name or "repo"


def _authenticated_url(repo_url: str, token: str) -> str:
    return f"https://{token}@{repo_url.removeprefix('https://')}"


def sync_repository(
    repo_url: str,
    dest: Path,
    *,
    token: str | None = None,
    runner: GitRunner | None = None,
) -> None:
    """
    Clone a repository, or pull it when dest already exists.

    Args:
        repo_url: HTTPS repository URL
        dest: Checkout directory
        token: Optional GitHub token embedded in the clone URL
        runner: Command runner (tests pass a fake)

    Raises:
        GitCommandError: If git exits with an error
    """
    runner = runner or _default_runner
    env = None
    if token:
        env = {**os.environ, "GIT_ASKPASS": "echo", "GIT_TERMINAL_PROMPT": "0"}

    if dest.exists():
        logger.info(f"Directory {dest} already exists. Pulling latest changes...")
        action, args = "pull", ["git", "pull"]
        cwd = dest
    else:
        logger.info(f"Cloning repository from {repo_url}...")
        clone_url = _authenticated_url(repo_url, token) if token else repo_url
        dest.parent.mkdir(parents=True, exist_ok=True)
        action, args = "clone", ["git", "clone", clone_url, str(dest)]
        cwd = None

    try:
        runner(args, cwd=cwd, env=env)
    except (subprocess.CalledProcessError, OSError) as e:
        stderr = getattr(e, "stderr", None) or str(e)
        if token:
            stderr = stderr.replace(token, "***")
        raise GitCommandError(action, repo_url, stderr.strip()) from None

    if action == "clone":
        logger.info(f"Repository cloned to {dest}")


def _matches(relative_path: str, extension: str, target: Target) -> bool:
    if extension not in target.file_extensions:
        return False
    if not any(folder in relative_path for folder in target.include_folders):
        return False
    return not any(folder and folder in relative_path for folder in target.exclude_folders)


def find_files(root: Path, target: Target) -> list[Path]:
    """
    Select the files of a checkout that belong to a target.

    A file is selected when its path relative to root contains one of the
    include folders, contains none of the exclude folders, and its
    extension is listed. Returned in sorted order.
    """
    selected = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if name not in _SKIPPED_DIRS]
        for filename in filenames:
            path = Path(dirpath) / filename
            relative = path.relative_to(root).as_posix()
            if _matches(relative, path.suffix.removeprefix("."), target):
                selected.append(path)
    return sorted(selected)


def combine_files(root: Path, files: Sequence[Path]) -> str:
    """Concatenate files into one markdown document, one section per file."""
    sections = []
    for path in files:
        relative = path.relative_to(root).as_posix()
        content = path.read_text(encoding="utf-8", errors="replace")
        sections.append(f"# {relative}\n\n```{path.suffix.removeprefix('.')}\n{content}\n```\n\n")
    return "".join(sections)


def combine_target(
    target: Target,
    workdir: Path,
    *,
    token: str | None = None,
    runner: GitRunner | None = None,
    today: date | None = None,
) -> Path | None:
    """
    Fetch a target and write its combined document.

    Args:
        target: Source to combine
        workdir: Base directory holding in/ (checkouts) and out/ (documents)
        token: GitHub token (defaults to the GITHUB_TOKEN variable)
        runner: Git command runner
        today: Date stamped into the file name (defaults to today)

    Returns:
        Path of the written document, or None when no file matched

    Raises:
        GitCommandError: If the repository cannot be fetched
    """
    name = repo_name(target.repo_url)
    checkout = workdir / "in" / name
    out_dir = workdir / "out"
    token = token if token is not None else os.environ.get("GITHUB_TOKEN")

    sync_repository(target.repo_url, checkout, token=token, runner=runner)

    logger.info(f"Searching for files in {checkout}...")
    files = find_files(checkout, target)
    logger.info(f"Found {len(files)} file(s) to combine.")

    combined = combine_files(checkout, files)
    if not combined:
        logger.info("No files to combine.")
        return None

    # Counts the empty piece after the trailing blank line too
    word_count = len(_WHITESPACE.split(combined))
    stamp = (today or date.today()).isoformat()
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / f"{name}-{stamp}-{word_count}.md"
    output_path.write_text(combined, encoding="utf-8")

    logger.info(f"Combined file created at: {output_path}")
    return output_path
