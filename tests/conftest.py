import shutil
from typing import Iterator, List

import pytest

from tabgen import _settings

collect_ignore_glob: List[str] = []


@pytest.fixture(scope="function", autouse=True)
def settings() -> Iterator[_settings.SettingsDict]:
    """Restore global settings after each test, so tests that change them can't
    leak into each other."""
    original = dict(_settings._settings)
    yield _settings._settings
    _settings._settings.update(original)  # type: ignore


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "shell(name): needs the named shell to be installed"
    )


def pytest_runtest_setup(item) -> None:
    for marker in item.iter_markers(name="shell"):
        name = marker.args[0]
        if shutil.which(name) is None:
            pytest.skip(f"{name} is not installed")
