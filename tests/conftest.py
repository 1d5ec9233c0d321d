"""Shared test fixtures for gitstate tests."""

from pathlib import Path

import pytest
from rich.console import Console

from gitstate.enums import RefType
from gitstate.repository import FakeRepository, Ref, Remote


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def fake_repo(tmp_path: Path) -> FakeRepository:
    """FakeRepository bound to a real directory so root resolution succeeds.

    HEAD is ``main`` tracking ``origin/main``; one remote is configured.
    """
    main = Ref(name="main", commit="a1b2c3d4e5", type=RefType.HEAD)
    return FakeRepository(
        path=tmp_path,
        head=Ref(name="main", type=RefType.HEAD),
        branches={
            "main": Ref(
                name="main",
                commit="a1b2c3d4e5",
                type=RefType.HEAD,
                upstream="origin/main",
                ahead=1,
                behind=0,
            )
        },
        refs=[
            main,
            Ref(
                name="origin/main",
                commit="a1b2c3d4e5",
                type=RefType.REMOTE_HEAD,
                remote="origin",
            ),
        ],
        remotes=[Remote(name="origin", url="https://example.com/project.git")],
        messages=["Initial commit"],
    )
