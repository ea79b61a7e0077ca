"""Read-only description of a command hierarchy: commands, options, and positional
arguments. Completion scripts are generated from these."""

from __future__ import annotations

import dataclasses
from typing import Dict, List, Mapping, Sequence, Tuple

from ._candidates import NONE, CompletionCandidates


@dataclasses.dataclass(frozen=True)
class Option:
    """An option, like `-v`/`--verbose` or `--output FILE`.

    Attributes:
        names: Every name the option is accepted under, prefix included.
        arity: Number of values consumed after the option name. 0 for flags.
        completion: Where suggestions for the option's values come from.
        help: Helptext. Only the first line is used in completion descriptions.
        hidden: Hidden options are left out of generated scripts.
    """

    names: Tuple[str, ...]
    arity: int = 1
    completion: CompletionCandidates = NONE
    help: str = ""
    hidden: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.names, str):
            object.__setattr__(self, "names", (self.names,))
        else:
            object.__setattr__(self, "names", tuple(self.names))

    @property
    def longest_name(self) -> str:
        """Longest name of the option. Ties go to the name declared first."""
        return max(self.names, key=len)


@dataclasses.dataclass(frozen=True)
class Argument:
    """A positional argument.

    Attributes:
        name: Name of the argument. Used to dispatch completions.
        arity: Number of tokens consumed. A negative arity consumes all remaining
            tokens; only the last argument of a command should be unbounded.
        completion: Where suggestions for the argument come from.
        help: Helptext.
    """

    name: str
    arity: int = 1
    completion: CompletionCandidates = NONE
    help: str = ""

    @property
    def is_unbounded(self) -> bool:
        return self.arity < 0


@dataclasses.dataclass(frozen=True)
class Command:
    """A command, possibly containing subcommands.

    Attributes:
        name: Name of the command. Must be unique among its siblings.
        help: Helptext.
        options: Options accepted by this command.
        arguments: Positional arguments accepted by this command.
        subcommands: Child commands.
        aliases: Maps an alias to the tokens it expands into.
        allow_interspersed_args: If False, options are no longer recognized once a
            positional argument has been seen.
    """

    name: str
    help: str = ""
    options: Tuple[Option, ...] = ()
    arguments: Tuple[Argument, ...] = ()
    subcommands: Tuple[Command, ...] = ()
    aliases: Mapping[str, Tuple[str, ...]] = dataclasses.field(default_factory=dict)
    allow_interspersed_args: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "subcommands", tuple(self.subcommands))
        aliases: Dict[str, Tuple[str, ...]] = {
            name: _to_tokens(tokens) for name, tokens in self.aliases.items()
        }
        object.__setattr__(self, "aliases", aliases)

    @property
    def visible_options(self) -> Tuple[Option, ...]:
        return tuple(opt for opt in self.options if not opt.hidden)

    @property
    def fixed_argument_names(self) -> List[str]:
        """Names of the fixed-arity arguments, each repeated once per token it
        consumes. Stops at the first argument that isn't fixed-arity."""
        out: List[str] = []
        for arg in self.arguments:
            if arg.arity <= 0:
                break
            out.extend([arg.name] * arg.arity)
        return out

    @property
    def vararg_name(self) -> str:
        """Name of the unbounded argument, or an empty string."""
        for arg in self.arguments:
            if arg.is_unbounded:
                return arg.name
        return ""

    @property
    def has_completions(self) -> bool:
        """False when there is nothing at all to complete for this command."""
        return (
            len(self.visible_options) > 0
            or len(self.arguments) > 0
            or len(self.subcommands) > 0
        )


def _to_tokens(tokens: Sequence[str]) -> Tuple[str, ...]:
    if isinstance(tokens, str):
        return (tokens,)
    return tuple(tokens)
