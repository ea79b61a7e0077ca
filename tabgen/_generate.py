"""Entry points for generating completion scripts, and the registry of supported
shells."""

from __future__ import annotations

from typing import Callable, Dict, List

from . import _bash, _fish
from ._model import Command
from ._settings import get_settings

SUPPORTED_SHELLS: List[str] = []
_SUPPORTED_COMPLETERS: Dict[str, Callable[[Command], str]] = {}


def mark_completer(shell: str):
    def wrapper(func: Callable[[Command], str]) -> Callable[[Command], str]:
        if shell not in SUPPORTED_SHELLS:
            SUPPORTED_SHELLS.append(shell)
        _SUPPORTED_COMPLETERS[shell] = func
        return func

    return wrapper


def get_completer(shell: str) -> Callable[[Command], str]:
    try:
        return _SUPPORTED_COMPLETERS[shell]
    except KeyError:
        raise NotImplementedError(
            "shell (%s) must be in {%s}" % (shell, ",".join(SUPPORTED_SHELLS))
        )


@mark_completer("bash")
def generate_bash_completion(command: Command) -> str:
    """Returns a bash completion script for `command`.

    The script ends by registering the root function with `complete -F`, and can be
    sourced directly or installed into a `bash-completion` directory.
    """
    return _bash.generate(
        command,
        shell="bash",
        custom_shell="bash",
        generator_name=get_settings()["generator_name"],
    )


@mark_completer("zsh")
def generate_zsh_completion(command: Command) -> str:
    """Returns a zsh completion script for `command`.

    This is the bash script, preceded by `autoload bashcompinit; bashcompinit`.
    """
    settings = get_settings()
    return _bash.generate(
        command,
        shell="zsh",
        custom_shell=settings["zsh_custom_shell"],
        generator_name=settings["generator_name"],
    )


@mark_completer("fish")
def generate_fish_completion(command: Command) -> str:
    """Returns a fish completion script for `command`, or an empty string if the
    command has neither visible options nor subcommands."""
    return _fish.generate(command, generator_name=get_settings()["generator_name"])


def complete(command: Command, shell: str = "bash") -> str:
    """Returns a completion script for `command`.

    Args:
        command: Root of the command tree.
        shell: One of :data:`SUPPORTED_SHELLS`.

    Returns:
        The script text. Empty if there is nothing to complete.
    """
    return get_completer(shell)(command)
