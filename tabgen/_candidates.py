"""Completion candidate specifications, and their translation into shell snippets."""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Mapping, Optional, Tuple, Union

from typing_extensions import Literal, assert_never

from . import _strings

log = logging.getLogger(__name__)

ShellType = Literal["bash", "zsh", "fish"]


@dataclasses.dataclass(frozen=True)
class NoCompletion:
    """Offer no suggestions."""


@dataclasses.dataclass(frozen=True)
class PathCompletion:
    """Complete filesystem paths, using the shell's native path completion."""


@dataclasses.dataclass(frozen=True)
class HostnameCompletion:
    """Complete hostnames."""


@dataclasses.dataclass(frozen=True)
class UsernameCompletion:
    """Complete system usernames."""


@dataclasses.dataclass(frozen=True)
class FixedCompletion:
    """Complete from a fixed list of literal words."""

    candidates: Tuple[str, ...]

    def __init__(self, *candidates: str) -> None:
        # Accept both `FixedCompletion("a", "b")` and `FixedCompletion(["a", "b"])`.
        if len(candidates) == 1 and not isinstance(candidates[0], str):
            candidates = tuple(candidates[0])
        object.__setattr__(self, "candidates", tuple(map(str, candidates)))


@dataclasses.dataclass(frozen=True)
class CustomCompletion:
    """Complete using a shell snippet supplied by the application.

    `generator` is called with the kind of shell a script is being generated for,
    and should return a snippet for that shell or `None` for no suggestions.

    For bash (and zsh), the snippet becomes the body of a function called with
    `compgen -F`, so it should populate `COMPREPLY`. For fish, the snippet is
    passed to `complete -a` as is, so it is usually a command substitution like
    `"(git branch --format='%(refname:short)')"`.
    """

    generator: Callable[[ShellType], Optional[str]]

    @staticmethod
    def from_snippets(snippets: Mapping[str, str]) -> CustomCompletion:
        """Build a custom completion from a `{shell: snippet}` table."""
        table = dict(snippets)

        def generator(shell: ShellType) -> Optional[str]:
            return table.get(shell)

        return CustomCompletion(generator)


CompletionCandidates = Union[
    NoCompletion,
    PathCompletion,
    HostnameCompletion,
    UsernameCompletion,
    FixedCompletion,
    CustomCompletion,
]

NONE = NoCompletion()
PATH = PathCompletion()
HOSTNAME = HostnameCompletion()
USERNAME = UsernameCompletion()


def bash_candidate_snippet(
    candidate: CompletionCandidates,
    custom_function_name: str,
    shell: ShellType,
) -> Optional[str]:
    """Statement setting `COMPREPLY` for the word being completed.

    Returns an empty string when nothing should be offered, and `None` when the
    parameter should not get a dispatch branch at all.
    """
    if isinstance(candidate, NoCompletion):
        return ""
    elif isinstance(candidate, PathCompletion):
        return 'COMPREPLY=($(compgen -o default -- "${word}"))'
    elif isinstance(candidate, HostnameCompletion):
        return 'COMPREPLY=($(compgen -A hostname -- "${word}"))'
    elif isinstance(candidate, UsernameCompletion):
        return 'COMPREPLY=($(compgen -A user -- "${word}"))'
    elif isinstance(candidate, FixedCompletion):
        return 'COMPREPLY=($(compgen -W {} -- "${{word}}"))'.format(
            _strings.bash_quote(" ".join(candidate.candidates))
        )
    elif isinstance(candidate, CustomCompletion):
        if candidate.generator(shell) is None:
            log.debug("custom:no %s snippet for %s", shell, custom_function_name)
            return None
        # bash warns that `compgen -F` might not do what you expect.
        return "COMPREPLY=($(compgen -F {} 2>/dev/null))".format(
            custom_function_name
        )
    else:
        assert_never(candidate)


def fish_candidate_snippet(candidate: CompletionCandidates) -> Optional[str]:
    """Argument to `complete -a`, or `None` when nothing should be offered."""
    if isinstance(candidate, NoCompletion):
        return None
    elif isinstance(candidate, PathCompletion):
        return '"(__fish_complete_path)"'
    elif isinstance(candidate, HostnameCompletion):
        return '"(__fish_print_hostnames)"'
    elif isinstance(candidate, UsernameCompletion):
        return '"(__fish_complete_users)"'
    elif isinstance(candidate, FixedCompletion):
        return _strings.fish_quote(" ".join(candidate.candidates))
    elif isinstance(candidate, CustomCompletion):
        snippet = candidate.generator("fish")
        if snippet is None:
            log.debug("custom:no fish snippet")
        return snippet
    else:
        assert_never(candidate)
