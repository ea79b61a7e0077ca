"""Bash completion scripts. zsh reuses these through `bashcompinit`.

One function is generated per command. Each function walks `COMP_WORDS` from the
command's first token up to the cursor, tracking whether the cursor is inside an
option's values, at a fixed positional argument, or at the unbounded argument,
and then dispatches on that to fill `COMPREPLY`. Subcommand functions are called
with the index of the first token after the subcommand name.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from typing_extensions import Literal

from . import _strings
from ._candidates import (
    CompletionCandidates,
    CustomCompletion,
    ShellType,
    bash_candidate_snippet,
)
from ._model import Command

log = logging.getLogger(__name__)

# Advances `i` past an option name and, for `--opt = value` forms split by
# COMP_WORDBREAKS, past the `=` too. Bash functions can assign to locals of
# their callers, which is what makes this work.
_SKIP_OPT_EQ = """\
__skip_opt_eq() {
    (( i = i + 1 ))
    if [[ "${COMP_WORDS[$i]}" == '=' ]]; then
          (( i = i + 1 ))
    fi
}"""


def generate(
    command: Command,
    shell: Literal["bash", "zsh"],
    custom_shell: ShellType,
    generator_name: str,
) -> str:
    """Generate a bash-dialect completion script for `command` and its subcommands.

    Args:
        command: Root command.
        shell: "bash" or "zsh". zsh scripts load `bashcompinit` first.
        custom_shell: Shell kind passed to custom completion generators.
        generator_name: Written into the header comment.

    Returns:
        Script text, or an empty string if there is nothing to complete.
    """
    lines: List[str] = []
    _emit_command(
        lines,
        command,
        chain=(command.name,),
        shell=shell,
        custom_shell=custom_shell,
        generator_name=generator_name,
    )
    if len(lines) == 0:
        return ""
    return "\n".join(lines) + "\n"


def _emit_preamble(
    lines: List[str], command: Command, shell: str, generator_name: str
) -> None:
    lines.append(f"#!/usr/bin/env {shell}")
    lines.append(f"# Command completion for {command.name}")
    lines.append(f"# Generated by {generator_name}")
    lines.append("")
    if shell == "zsh":
        lines.append("autoload bashcompinit")
        lines.append("bashcompinit")
        lines.append("")
    lines.append(_SKIP_OPT_EQ)


def _emit_command(
    lines: List[str],
    command: Command,
    chain: Tuple[str, ...],
    shell: str,
    custom_shell: ShellType,
    generator_name: str,
) -> None:
    if not command.has_completions:
        log.debug("skip:%s:nothing to complete", " ".join(chain))
        return

    is_root = len(chain) == 1
    func_name = _strings.completion_function_name(chain)
    options = command.visible_options
    log.debug("command:%s:%s", " ".join(chain), func_name)

    if is_root:
        _emit_preamble(lines, command, shell, generator_name)

    # Parameters that can receive values, keyed by the name `in_param` is set to.
    params: List[Tuple[str, CompletionCandidates]] = [
        (opt.longest_name, opt.completion) for opt in options
    ]
    params.extend((arg.name, arg.completion) for arg in command.arguments)

    # Stubs for custom completions, called through `compgen -F`.
    for name, candidate in params:
        snippet = _custom_snippet(candidate, custom_shell)
        if snippet is None:
            continue
        lines.append("")
        lines.append(
            "{}() {{".format(_strings.custom_completion_function_name(func_name, name))
        )
        lines.append(_strings.indent_snippet(snippet))
        lines.append("}")

    # Scanning loop.
    lines.append("")
    lines.append(f"{func_name}() {{")
    lines.append("  local i={}".format(1 if is_root else "$1"))
    lines.append("  local in_param=''")
    lines.append(
        "  local fixed_arg_names=({})".format(
            " ".join(map(_strings.bash_quote, command.fixed_argument_names))
        )
    )
    lines.append("  local vararg_name={}".format(_strings.bash_quote(command.vararg_name)))
    lines.append("  local can_parse_options=1")
    lines.append("")
    lines.append("  while [[ ${i} -lt $COMP_CWORD ]]; do")
    lines.append("    if [[ ${can_parse_options} -eq 1 ]]; then")
    lines.append('      case "${COMP_WORDS[$i]}" in')
    lines.append("        --)")
    lines.append("          can_parse_options=0")
    lines.append("          (( i = i + 1 ));")
    lines.append("          continue")
    lines.append("          ;;")
    for opt in options:
        lines.append("        {})".format("|".join(map(_strings.bash_word, opt.names))))
        lines.append("          __skip_opt_eq")
        if opt.arity > 0:
            lines.append(f"          (( i = i + {opt.arity} ))")
            lines.append(
                "          [[ ${{i}} -gt COMP_CWORD ]] && in_param={} || in_param=''".format(
                    _strings.bash_quote(opt.longest_name)
                )
            )
        else:
            lines.append("          in_param=''")
        lines.append("          continue")
        lines.append("          ;;")
    lines.append("      esac")
    lines.append("    fi")
    lines.append('    case "${COMP_WORDS[$i]}" in')
    for alias, tokens in command.aliases.items():
        lines.append("      {})".format(_strings.bash_word(alias)))
        lines.append("        (( i = i + 1 ))")
        lines.append(
            '        COMP_WORDS=( "${{COMP_WORDS[@]:0:i}}" {} "${{COMP_WORDS[@]:${{i}}}}" )'.format(
                " ".join(map(_strings.bash_quote, tokens))
            )
        )
        lines.append(f"        (( COMP_CWORD = COMP_CWORD + {len(tokens)} ))")
        if not command.allow_interspersed_args:
            lines.append("        can_parse_options=0")
        lines.append("        ;;")
    for sub in command.subcommands:
        lines.append("      {})".format(_strings.bash_word(sub.name)))
        if sub.has_completions:
            lines.append(
                "        {} $(( i + 1 ))".format(
                    _strings.completion_function_name(chain + (sub.name,))
                )
            )
        lines.append("        return")
        lines.append("        ;;")
    lines.append("      *)")
    lines.append("        (( i = i + 1 ))")
    lines.append("        # drop the head of the array")
    lines.append('        fixed_arg_names=("${fixed_arg_names[@]:1}")')
    if not command.allow_interspersed_args:
        lines.append("        can_parse_options=0")
    lines.append("        ;;")
    lines.append("    esac")
    lines.append("  done")
    lines.append('  local word="${COMP_WORDS[$COMP_CWORD]}"')

    # Option names are offered as soon as the word starts like one.
    if len(options) > 0:
        all_names = [name for opt in options for name in opt.names]
        prefix_chars = "".join(sorted({name[0] for name in all_names if name}))
        lines.append(
            '  if [[ "${{word}}" =~ ^[{}] ]]; then'.format(_bracket_expression(prefix_chars))
        )
        lines.append(
            '    COMPREPLY=($(compgen -W {} -- "${{word}}"))'.format(
                _strings.bash_quote(" ".join(all_names))
            )
        )
        lines.append("    return")
        lines.append("  fi")

    # Dispatch on the parameter under the cursor.
    lines.append("")
    lines.append("  # We're either at an option's value, or the first remaining fixed size")
    lines.append("  # arg, or the vararg if there are no fixed args left")
    lines.append('  [[ -z "${in_param}" ]] && in_param=${fixed_arg_names[0]}')
    lines.append('  [[ -z "${in_param}" ]] && in_param=${vararg_name}')
    lines.append("")
    lines.append('  case "${in_param}" in')
    for name, candidate in params:
        statement = bash_candidate_snippet(
            candidate,
            _strings.custom_completion_function_name(func_name, name),
            custom_shell,
        )
        if statement is None:
            continue
        lines.append("    {})".format(_strings.bash_word(name)))
        if len(statement) > 0:
            lines.append("      " + statement)
        lines.append("      ;;")
    if len(command.subcommands) > 0:
        lines.append("    *)")
        lines.append(
            '      COMPREPLY=($(compgen -W {} -- "${{word}}"))'.format(
                _strings.bash_quote(" ".join(sub.name for sub in command.subcommands))
            )
        )
        lines.append("      ;;")
    lines.append("  esac")
    lines.append("}")

    for sub in command.subcommands:
        log.debug("subcommand:%s:%s", " ".join(chain), sub.name)
        _emit_command(
            lines,
            sub,
            chain=chain + (sub.name,),
            shell=shell,
            custom_shell=custom_shell,
            generator_name=generator_name,
        )

    if is_root:
        lines.append("")
        lines.append("complete -F {} {}".format(func_name, _strings.bash_word(command.name)))


def _custom_snippet(
    candidate: CompletionCandidates, custom_shell: ShellType
) -> Optional[str]:
    if not isinstance(candidate, CustomCompletion):
        return None
    return candidate.generator(custom_shell)


def _bracket_expression(chars: Sequence[str]) -> str:
    """Characters for a `[...]` regex bracket expression. A closing bracket is only
    literal right after the opening one, and a hyphen only at either end."""
    chars = list(chars)
    head = ""
    if "]" in chars:
        chars.remove("]")
        head += "]"
    tail = ""
    if "-" in chars:
        chars.remove("-")
        tail = "-"
    return head + "".join(chars) + tail
