"""Fish completion scripts.

Fish scans the command line itself, so the script is a flat list of `complete`
statements. Each command with subcommands declares a variable listing them; the
conditions of its children's statements use that variable to check whether one
of its subcommands has already been typed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from . import _strings
from ._candidates import fish_candidate_snippet
from ._model import Command, Option

log = logging.getLogger(__name__)


def generate(command: Command, generator_name: str) -> str:
    """Generate a fish completion script for `command` and its subcommands.

    Returns an empty string if the command has neither visible options nor
    subcommands.
    """
    if not _has_fish_completions(command):
        return ""

    lines: List[str] = []
    _emit_command(
        lines,
        command,
        chain=(command.name,),
        parent_variable=None,
        generator_name=generator_name,
    )
    return "\n".join(lines) + "\n"


def _has_fish_completions(command: Command) -> bool:
    return len(command.subcommands) > 0 or any(
        name.startswith("-") for opt in command.visible_options for name in opt.names
    )


def _short_and_long_names(option: Option) -> Tuple[List[str], List[str]]:
    """Names usable with `complete -s` and `complete -l`, without their hyphens.
    Names like `+x` or `-long` can't be expressed in fish and are dropped."""
    short: List[str] = []
    long: List[str] = []
    for name in option.names:
        if not name.startswith("-"):
            continue
        if len(name) == 2:
            short.append(name[1:])
        elif name.startswith("--") and len(name) > 2:
            long.append(name[2:])
    return short, long


def _emit_command(
    lines: List[str],
    command: Command,
    chain: Tuple[str, ...],
    parent_variable: Optional[str],
    generator_name: str,
) -> None:
    root_name = chain[0]
    is_root = len(chain) == 1
    variable = _strings.fish_subcommands_variable_name(chain)
    subcommand_names = " ".join(sub.name for sub in command.subcommands)
    log.debug("command:%s", " ".join(chain))

    if is_root:
        lines.append(f"# Command completion for {command.name}")
        lines.append(f"# Generated by {generator_name}")
        lines.append("")
        if len(command.subcommands) > 0:
            lines.append("### Declaring root subcommands")
            lines.append(
                "set -l {} {}".format(variable, _strings.fish_quote(subcommand_names))
            )
            lines.append("")
    else:
        if lines[-1] != "":
            lines.append("")
        lines.append(f"### Declaring {command.name}")
        if len(command.subcommands) > 0:
            lines.append(
                "set -l {} {}".format(variable, _strings.fish_quote(subcommand_names))
            )

        parts = ["complete", "-f", "-c", root_name]
        if len(chain) == 2:
            parts.extend(["-n", "__fish_use_subcommand"])
        else:
            parts.extend(
                [
                    "-n",
                    '"__fish_seen_subcommand_from {}; and not __fish_seen_subcommand_from ${}"'.format(
                        chain[-2], parent_variable
                    ),
                ]
            )
        parts.extend(["-a", command.name])
        help = _strings.first_line(command.help)
        if len(help) > 0:
            parts.extend(["-d", _strings.fish_quote(help)])
        lines.append(" ".join(parts))

    option_lines: List[str] = []
    for option in command.visible_options:
        short, long = _short_and_long_names(option)
        if len(short) == 0 and len(long) == 0:
            log.debug("skip:%s:no fish-compatible names", option.longest_name)
            continue

        parts = ["complete", "-f", "-c", root_name]
        if is_root:
            if len(command.subcommands) > 0:
                parts.extend(
                    ["-n", '"not __fish_seen_subcommand_from ${}"'.format(variable)]
                )
        else:
            parts.extend(["-n", '"__fish_seen_subcommand_from {}"'.format(command.name)])
        for name in short:
            parts.extend(["-s", name])
        for name in long:
            parts.extend(["-l", name])
        if option.arity > 0:
            parts.append("--require-parameter")
        candidates = fish_candidate_snippet(option.completion)
        if candidates is not None:
            parts.extend(["-a", candidates])
        help = _strings.first_line(option.help)
        if len(help) > 0:
            parts.extend(["-d", _strings.fish_quote(help)])
        option_lines.append(" ".join(parts))

    if len(option_lines) > 0:
        if is_root:
            lines.append("### Adding top level options")
        else:
            lines.append("")
        lines.extend(option_lines)

    for sub in command.subcommands:
        log.debug("subcommand:%s:%s", " ".join(chain), sub.name)
        _emit_command(
            lines,
            sub,
            chain=chain + (sub.name,),
            parent_variable=variable,
            generator_name=generator_name,
        )
