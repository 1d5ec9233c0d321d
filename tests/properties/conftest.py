from pathlib import Path

import pytest
from hypothesis import settings

settings.register_profile("gitstate", deadline=None)
settings.load_profile("gitstate")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.property)
