"""Unit tests for commit template lookup."""

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from gitstate.service import read_commit_template, template_candidates


class TestTemplateCandidates:
    def test_plain_path_is_tried_verbatim(self) -> None:
        assert template_candidates("/etc/msg.txt", Path("/work")) == [
            Path("/etc/msg.txt")
        ]

    def test_tilde_adds_git_directory_candidate(self) -> None:
        assert template_candidates("~/msg.txt", Path("/work/repo")) == [
            Path("~/msg.txt"),
            Path("/work/repo/.git/msg.txt"),
        ]

    def test_only_first_tilde_is_replaced(self) -> None:
        candidates = template_candidates("~/a~b.txt", Path("/r"))
        assert candidates[1] == Path("/r/.git/a~b.txt")


@pytest.mark.anyio
class TestReadCommitTemplate:
    async def test_reads_existing_file(self, tmp_path: Path) -> None:
        template = tmp_path / "msg.txt"
        template.write_text("feat: \n")

        assert await read_commit_template(str(template), tmp_path) == "feat: \n"

    async def test_reads_git_directory_fallback(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "msg.txt").write_text("fallback\n")

        assert await read_commit_template("~/msg.txt", tmp_path) == "fallback\n"

    async def test_missing_file_is_empty(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        logger = mocker.MagicMock()

        result = await read_commit_template("~/absent.txt", tmp_path, logger)

        assert result == ""
        logger.debug.assert_called_once_with(
            "commit_template_missing", path="~/absent.txt"
        )

    async def test_unreadable_file_is_empty(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        logger = mocker.MagicMock()
        directory = tmp_path / "template"
        directory.mkdir()

        result = await read_commit_template(str(directory), tmp_path, logger)

        assert result == ""
        logger.warning.assert_called_once()
