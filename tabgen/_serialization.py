"""Loading command trees from YAML (or JSON) documents and plain dictionaries.

Example document:

```yaml
name: git
help: the stupid content tracker
options:
  - names: [-v, --verbose]
    arity: 0
subcommands:
  - name: checkout
    arguments:
      - name: branch
        completion:
          custom:
            bash: COMPREPLY=($(git branch --format='%(refname:short)'))
            fish: "(git branch --format='%(refname:short)')"
aliases:
  co: [checkout]
```
"""

from __future__ import annotations

from typing import IO, Any, Dict, List, Mapping, Set, Union

import yaml

from ._candidates import (
    HOSTNAME,
    NONE,
    PATH,
    USERNAME,
    CompletionCandidates,
    CustomCompletion,
    FixedCompletion,
)
from ._model import Argument, Command, Option

_NAMED_CANDIDATES: Dict[str, CompletionCandidates] = {
    "none": NONE,
    "path": PATH,
    "hostname": HOSTNAME,
    "username": USERNAME,
}

_COMMAND_KEYS = {
    "name",
    "help",
    "options",
    "arguments",
    "subcommands",
    "aliases",
    "allow_interspersed_args",
}
_OPTION_KEYS = {"names", "arity", "completion", "help", "hidden"}
_ARGUMENT_KEYS = {"name", "arity", "completion", "help"}


class CommandSpecError(ValueError):
    """Raised when a declarative command tree is malformed."""


def command_from_yaml(stream: Union[str, IO[str], IO[bytes]]) -> Command:
    """Load a command tree from a YAML document. JSON documents work too.

    Args:
        stream: YAML text, or a file-like object to read from.

    Returns:
        The root command.
    """
    data = yaml.safe_load(stream)
    return command_from_dict(data)


def command_from_dict(data: Mapping[str, Any]) -> Command:
    """Build a command tree from nested dictionaries and lists. See the module
    docstring for the expected layout."""
    return _command(data, location="")


def _command(data: Any, location: str) -> Command:
    if not isinstance(data, Mapping):
        raise CommandSpecError(
            f"{location or '<root>'}: expected a mapping, got {type(data).__name__}"
        )
    if "name" not in data:
        raise CommandSpecError(f"{location or '<root>'}: commands need a `name`")
    name = _string(data["name"], f"{location}.name" if location else "name")
    location = location or name
    _check_keys(data, _COMMAND_KEYS, location)

    aliases = data.get("aliases") or {}
    if not isinstance(aliases, Mapping):
        raise CommandSpecError(f"{location}.aliases: expected a mapping")

    return Command(
        name=name,
        help=_string(data.get("help") or "", f"{location}.help"),
        options=tuple(
            _option(opt, f"{location}.options[{i}]")
            for i, opt in enumerate(_list(data, "options", location))
        ),
        arguments=tuple(
            _argument(arg, f"{location}.arguments[{i}]")
            for i, arg in enumerate(_list(data, "arguments", location))
        ),
        subcommands=tuple(
            _command(sub, f"{location}.subcommands[{i}]")
            for i, sub in enumerate(_list(data, "subcommands", location))
        ),
        aliases={
            str(alias): _tokens(tokens, f"{location}.aliases.{alias}")
            for alias, tokens in aliases.items()
        },
        allow_interspersed_args=bool(data.get("allow_interspersed_args", True)),
    )


def _option(data: Any, location: str) -> Option:
    if not isinstance(data, Mapping):
        raise CommandSpecError(f"{location}: expected a mapping")
    _check_keys(data, _OPTION_KEYS, location)
    if "names" not in data:
        raise CommandSpecError(f"{location}: options need `names`")
    names = _tokens(data["names"], f"{location}.names")
    if len(names) == 0:
        raise CommandSpecError(f"{location}.names: options need at least one name")
    return Option(
        names=names,
        arity=_int(data.get("arity", 1), f"{location}.arity"),
        completion=_completion(data.get("completion", "none"), location),
        help=_string(data.get("help") or "", f"{location}.help"),
        hidden=bool(data.get("hidden", False)),
    )


def _argument(data: Any, location: str) -> Argument:
    if not isinstance(data, Mapping):
        raise CommandSpecError(f"{location}: expected a mapping")
    _check_keys(data, _ARGUMENT_KEYS, location)
    if "name" not in data:
        raise CommandSpecError(f"{location}: arguments need a `name`")
    return Argument(
        name=_string(data["name"], f"{location}.name"),
        arity=_int(data.get("arity", 1), f"{location}.arity"),
        completion=_completion(data.get("completion", "none"), location),
        help=_string(data.get("help") or "", f"{location}.help"),
    )


def _completion(data: Any, location: str) -> CompletionCandidates:
    location = f"{location}.completion"
    if data is None:
        return NONE
    if isinstance(data, str):
        if data not in _NAMED_CANDIDATES:
            raise CommandSpecError(
                f"{location}: unknown completion {data!r}, expected one of"
                f" {', '.join(_NAMED_CANDIDATES)}, or a `choices`/`custom` mapping"
            )
        return _NAMED_CANDIDATES[data]
    if isinstance(data, Mapping) and len(data) == 1:
        if "choices" in data:
            return FixedCompletion(_tokens(data["choices"], f"{location}.choices"))
        if "custom" in data:
            snippets = data["custom"]
            if not isinstance(snippets, Mapping):
                raise CommandSpecError(
                    f"{location}.custom: expected a mapping from shell to snippet"
                )
            return CustomCompletion.from_snippets(
                {
                    str(shell): _string(snippet, f"{location}.custom.{shell}")
                    for shell, snippet in snippets.items()
                }
            )
    raise CommandSpecError(
        f"{location}: expected a string, or a mapping with a single `choices` or"
        " `custom` key"
    )


def _check_keys(data: Mapping[str, Any], allowed: Set[str], location: str) -> None:
    unknown = sorted(set(map(str, data.keys())) - allowed)
    if len(unknown) > 0:
        raise CommandSpecError(f"{location}: unknown keys {', '.join(unknown)}")


def _list(data: Mapping[str, Any], key: str, location: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise CommandSpecError(f"{location}.{key}: expected a list")
    return value


def _tokens(value: Any, location: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise CommandSpecError(f"{location}: expected a list of strings")
    return [_string(v, location) for v in value]


def _string(value: Any, location: str) -> str:
    # Numbers and booleans are common in hand-written YAML (`choices: [1, 2]`).
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    raise CommandSpecError(f"{location}: expected a string")


def _int(value: Any, location: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CommandSpecError(f"{location}: expected an integer")
    return value
