# =============================================================================
# tests/test_combine.py - Combine Tool Tests
# =============================================================================
# This module contains tests for:
# - Repository naming and file selection
# - Markdown assembly and output naming
# - Clone / pull command construction (git is never executed)
# - The command line entry point
# =============================================================================

import subprocess
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from ragify.__main__ import main
from ragify.combine import (
    GitCommandError,
    combine_files,
    combine_target,
    find_files,
    repo_name,
    sync_repository,
)
from ragify.targets import Target

DOCS_TARGET = Target(
    repo_url="https://github.com/acme/docs",
    file_extensions=("md",),
    include_folders=("docs",),
    exclude_folders=("blog", ""),
)


def write(root: Path, relative: str, content: str = "text") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class FakeGit:
    """Records git invocations; optionally populates the clone target."""

    def __init__(self, files: dict[str, str] | None = None, fail: bool = False):
        self.calls: list[tuple[list[str], Path | None, dict | None]] = []
        self.files = files or {}
        self.fail = fail

    def __call__(self, args, *, cwd=None, env=None):
        self.calls.append((list(args), cwd, env))
        if self.fail:
            raise subprocess.CalledProcessError(128, list(args), stderr="fatal: repository not found\n")
        if args[1] == "clone":
            dest = Path(args[-1])
            dest.mkdir(parents=True)
            for relative, content in self.files.items():
                write(dest, relative, content)


# =============================================================================
# Naming and Selection Tests
# =============================================================================

class TestRepoName:
    """Test repo_name."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://github.com/discordjs/discord.js", "discordjs-discord.js"),
            ("https://github.com/elysiajs/documentation.git", "elysiajs-documentation"),
            ("https://github.com/", "repo"),
        ],
    )
    def test_names(self, url, expected):
        assert repo_name(url) == expected


class TestFindFiles:
    """Test find_files."""

    def test_include_exclude_and_extension(self, tmp_path):
        write(tmp_path, "docs/guide.md")
        write(tmp_path, "docs/nested/api.md")
        write(tmp_path, "docs/blog/post.md")
        write(tmp_path, "docs/image.png")
        write(tmp_path, "src/readme.md")
        write(tmp_path, ".git/docs/HEAD.md")

        files = find_files(tmp_path, DOCS_TARGET)

        assert [f.relative_to(tmp_path).as_posix() for f in files] == [
            "docs/guide.md",
            "docs/nested/api.md",
        ]

    def test_include_matches_anywhere_in_path(self, tmp_path):
        write(tmp_path, "packages/builders/src/index.ts")
        write(tmp_path, "packages/core/src/index.ts")
        target = Target("https://github.com/discordjs/discord.js", ("ts",), ("builders",), ())

        files = find_files(tmp_path, target)

        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["packages/builders/src/index.ts"]

    def test_no_include_folders_selects_nothing(self, tmp_path):
        write(tmp_path, "docs/guide.md")
        target = Target("https://github.com/acme/docs", ("md",), (), ())

        assert find_files(tmp_path, target) == []


class TestCombineFiles:
    """Test combine_files."""

    def test_sections(self, tmp_path):
        first = write(tmp_path, "docs/a.md", "# A")
        second = write(tmp_path, "docs/b.ts", "export {}")

        combined = combine_files(tmp_path, [first, second])

        assert combined == "# docs/a.md\n\n```md\n# A\n```\n\n# docs/b.ts\n\n```ts\nexport {}\n```\n\n"

    def test_empty(self, tmp_path):
        assert combine_files(tmp_path, []) == ""


# =============================================================================
# Git Tests
# =============================================================================

class TestSyncRepository:
    """Test sync_repository command construction."""

    def test_clone_when_missing(self, tmp_path):
        git = FakeGit()
        dest = tmp_path / "in" / "acme-docs"

        sync_repository("https://github.com/acme/docs", dest, runner=git)

        args, cwd, env = git.calls[0]
        assert args == ["git", "clone", "https://github.com/acme/docs", str(dest)]
        assert cwd is None
        assert env is None

    def test_clone_with_token(self, tmp_path):
        git = FakeGit()

        sync_repository("https://github.com/acme/docs", tmp_path / "repo", token="s3cret", runner=git)

        args, _, env = git.calls[0]
        assert args[2] == "https://s3cret@github.com/acme/docs"
        assert env["GIT_TERMINAL_PROMPT"] == "0"

    def test_pull_when_present(self, tmp_path):
        git = FakeGit()
        dest = tmp_path / "repo"
        dest.mkdir()

        sync_repository("https://github.com/acme/docs", dest, runner=git)

        assert git.calls == [(["git", "pull"], dest, None)]

    def test_failure_hides_token(self, tmp_path):
        def runner(args, *, cwd=None, env=None):
            raise subprocess.CalledProcessError(128, args, stderr="fatal: could not read https://s3cret@github.com")

        with pytest.raises(GitCommandError) as exc_info:
            sync_repository("https://github.com/acme/docs", tmp_path / "repo", token="s3cret", runner=runner)

        assert exc_info.value.action == "clone"
        assert "s3cret" not in str(exc_info.value)


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestCombineTarget:
    """Test combine_target with a fake git runner."""

    def test_writes_dated_output(self, tmp_path, captured):
        git = FakeGit({"docs/guide.md": "hello world", "blog/post.md": "skip"})

        with patch("ragify.combine.logger", captured.logger):
            output = combine_target(DOCS_TARGET, tmp_path, token="", runner=git, today=date(2024, 5, 1))

        # "# docs/guide.md ```md hello world ```" plus the empty piece after "\n\n" -> 7
        assert output == tmp_path / "out" / "acme-docs-2024-05-01-7.md"
        assert output.read_text() == "# docs/guide.md\n\n```md\nhello world\n```\n\n"
        assert any("Found 1 file(s) to combine." in line for line in captured.out_lines())

    def test_nothing_to_combine(self, tmp_path, captured):
        git = FakeGit({"src/main.py": "print()"})

        with patch("ragify.combine.logger", captured.logger):
            output = combine_target(DOCS_TARGET, tmp_path, token="", runner=git)

        assert output is None
        assert not (tmp_path / "out").exists()
        assert any("No files to combine." in line for line in captured.out_lines())

    def test_token_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "envtoken")
        git = FakeGit()

        combine_target(DOCS_TARGET, tmp_path, runner=git)

        assert git.calls[0][0][2] == "https://envtoken@github.com/acme/docs"


class TestCli:
    """Test python -m ragify."""

    def test_missing_target(self, capsys):
        assert main([]) == 1
        assert "ERROR: Please provide a target name." in capsys.readouterr().err

    def test_unknown_target(self, capsys):
        assert main(["gitlab"]) == 1
        assert "No configuration found for target: gitlab" in capsys.readouterr().err

    def test_git_failure(self, tmp_path, capsys):
        with patch("ragify.combine._default_runner", FakeGit(fail=True)):
            code = main(["discord", "--workdir", str(tmp_path)])

        assert code == 1
        assert "Failed to clone https://github.com/discordjs/discord.js" in capsys.readouterr().err
