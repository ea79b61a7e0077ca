"""Global settings for tabgen.

Settings are read from environment variables when tabgen is imported, and can be
temporarily overridden with :func:`settings_context`.
"""

from __future__ import annotations

import contextlib
import os
from typing import Any, Iterator, Optional, Sequence

from typing_extensions import Literal, TypedDict


class SettingsDict(TypedDict):
    """Options that change the text of generated scripts.

    Attributes:
        zsh_custom_shell: Shell kind passed to custom completion generators when
            emitting zsh scripts. zsh runs the bash script through its
            `bashcompinit` shim, so bash snippets are used by default.
        generator_name: Name written in the header comment of every script.
    """

    zsh_custom_shell: Literal["bash", "zsh"]
    generator_name: str


def read_option(
    env_name: str, default: str, choices: Optional[Sequence[str]] = None
) -> Any:
    if env_name not in os.environ:
        return default
    value = os.environ[env_name]
    if choices is not None and value not in choices:
        raise ValueError(
            f"{env_name}={value} is not valid. Expected one of: {', '.join(choices)}"
        )
    return value


_settings: SettingsDict = {
    "zsh_custom_shell": read_option(
        "TABGEN_ZSH_CUSTOM_SHELL", "bash", choices=("bash", "zsh")
    ),
    "generator_name": read_option("TABGEN_GENERATOR_NAME", "tabgen"),
}


def get_settings() -> SettingsDict:
    return _settings


@contextlib.contextmanager
def settings_context(**overrides: Any) -> Iterator[SettingsDict]:
    """Temporarily override settings. Not thread-safe.

    ```python
    with tabgen.settings_context(zsh_custom_shell="zsh"):
        script = tabgen.generate_zsh_completion(command)
    ```
    """
    for key in overrides:
        if key not in _settings:
            raise KeyError(f"Unknown tabgen setting: {key}")

    restore = dict(_settings)
    _settings.update(overrides)  # type: ignore
    try:
        yield _settings
    finally:
        _settings.update(restore)  # type: ignore
