"""Utilities for deriving shell identifiers and quoting strings for each shell."""

import re
import shlex
import textwrap
from typing import Sequence

_RE_NON_WORD = re.compile(r"[^a-zA-Z0-9]")


def wordify(string: str) -> str:
    """Replace every non-alphanumeric character with an underscore."""
    return _RE_NON_WORD.sub("_", string)


def completion_function_name(chain: Sequence[str]) -> str:
    """Name of the bash function completing a command.

    ('git', 'remote', 'set-url') => '_git_remote_set_url'
    """
    return wordify("_" + "_".join(chain))


def custom_completion_function_name(function_name: str, parameter_name: str) -> str:
    """Name of the stub wrapping a custom bash snippet for one parameter.

    ('_git', '--author') => '__git_complete___author'
    """
    return "_{}_complete_{}".format(function_name, wordify(parameter_name))


def fish_subcommands_variable_name(chain: Sequence[str]) -> str:
    """Name of the fish variable listing a command's direct subcommands."""
    return wordify("_".join(chain) + "_subcommands")


def hyphen_separated_from_snake_case(name: str) -> str:
    stripped = name.strip("_")
    return stripped.replace("_", "-") if len(stripped) > 0 else name


def first_line(text: str) -> str:
    """First non-blank line of some helptext, stripped."""
    for line in text.strip().split("\n"):
        if len(line.strip()) > 0:
            return line.strip()
    return ""


def indent_snippet(snippet: str, prefix: str = "  ") -> str:
    """Dedent a user-provided snippet, then indent every line by `prefix`."""
    return textwrap.indent(textwrap.dedent(snippet).strip("\n"), prefix)


def bash_quote(string: str) -> str:
    """Single-quote a string for bash, unconditionally."""
    return "'" + string.replace("'", "'\\''") + "'"


def bash_word(string: str) -> str:
    """Quote a string for bash only if it contains special characters. Used for
    `case` patterns, which should read naturally in the generated script."""
    return shlex.quote(string)


def fish_quote(string: str) -> str:
    """Single-quote a string for fish. Only backslashes and single quotes are
    special inside fish single quotes."""
    return "'" + string.replace("\\", "\\\\").replace("'", "\\'") + "'"
