"""Build command trees from the signatures and docstrings of Python functions."""

from __future__ import annotations

import collections.abc
import enum
import inspect
import os
import pathlib
import types
import typing
import warnings
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import docstring_parser
from typing_extensions import Literal, get_args, get_origin, get_type_hints

from . import _strings
from ._candidates import NONE, PATH, CompletionCandidates, FixedCompletion
from ._model import Argument, Command, Option
from ._warnings import TabgenWarning
from .conf import _ArgConfiguration

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)
_LITERAL_ORIGINS = (Literal, typing.Literal)
_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


def command_from_function(
    fn: Callable[..., Any],
    name: Optional[str] = None,
    *,
    subcommands: Sequence[Command] = (),
    aliases: Optional[Mapping[str, Sequence[str]]] = None,
    allow_interspersed_args: bool = True,
) -> Command:
    """Describe a function as a command.

    Positional parameters without defaults become positional arguments, `*args`
    becomes an unbounded argument, and everything else becomes an option. Help
    text is read from the docstring, and completions are inferred from type
    annotations: `Literal[...]` and enums complete their values, paths complete
    filenames. Use `Annotated[T, tabgen.conf.arg(...)]` to override any of this.

    ```python
    def clone(repository: str, directory: pathlib.Path, depth: int = 1) -> None:
        \"\"\"Clone a repository into a new directory.\"\"\"

    tabgen.command_from_function(clone)
    ```

    Args:
        fn: Function to describe.
        name: Name of the command. Defaults to the function name, with underscores
            replaced by hyphens.
        subcommands: Child commands.
        aliases: Maps an alias to the tokens it expands into.
        allow_interspersed_args: Whether options can follow positional arguments.

    Returns:
        The command.
    """
    if not callable(fn):
        raise TypeError(f"Expected a callable, but got {fn!r}")

    docstring = docstring_parser.parse(inspect.getdoc(fn) or "")
    param_docs: Dict[str, str] = {
        doc.arg_name: _strings.first_line(doc.description)
        for doc in docstring.params
        if doc.description is not None
    }
    hints = get_type_hints(fn, include_extras=True)

    options: List[Option] = []
    arguments: List[Argument] = []
    for param in inspect.signature(fn).parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            warnings.warn(
                f"Skipping **{param.name} of {_function_name(fn)}: keyword"
                " arguments can't be completed.",
                category=TabgenWarning,
            )
            continue

        typ, confs = _unwrap_annotated(hints.get(param.name, Any))
        conf = _merge_configurations(confs)
        help = (
            conf.help
            if conf is not None and conf.help is not None
            else param_docs.get(param.name, "")
        )
        param_name = (
            conf.name
            if conf is not None and conf.name is not None
            else _strings.hyphen_separated_from_snake_case(param.name)
        )

        is_positional = param.kind is inspect.Parameter.VAR_POSITIONAL or (
            param.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and param.default is inspect.Parameter.empty
        )
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            # The annotation of `*args` describes a single element.
            arity, completion = -1, _completion_from_type(typ)
        else:
            arity, completion = _arity_and_completion(typ, positional=is_positional)

        if conf is not None and conf.arity is not None:
            arity = conf.arity
        if conf is not None and conf.completion is not None:
            completion = conf.completion

        if is_positional:
            arguments.append(
                Argument(name=param_name, arity=arity, completion=completion, help=help)
            )
        else:
            names = ["--" + param_name]
            if conf is not None and conf.aliases is not None:
                names.extend(conf.aliases)
            options.append(
                Option(
                    names=tuple(names),
                    arity=arity,
                    completion=completion,
                    help=help,
                    hidden=conf is not None and conf.hidden is True,
                )
            )

    return Command(
        name=name
        if name is not None
        else _strings.hyphen_separated_from_snake_case(_function_name(fn)),
        help=docstring.short_description or "",
        options=tuple(options),
        arguments=tuple(arguments),
        subcommands=tuple(subcommands),
        aliases=dict(aliases) if aliases is not None else {},
        allow_interspersed_args=allow_interspersed_args,
    )


def command_from_functions(
    name: str,
    subcommands: Mapping[str, Callable[..., Any]],
    *,
    help: str = "",
    aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> Command:
    """Describe a command whose subcommands are the given functions.

    ```python
    tabgen.command_from_functions(
        "git",
        {
            "checkout": checkout,
            "commit": commit,
        },
    )
    ```
    """
    return Command(
        name=name,
        help=help,
        subcommands=tuple(
            command_from_function(fn, name=subname)
            for subname, fn in subcommands.items()
        ),
        aliases=dict(aliases) if aliases is not None else {},
    )


def _function_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__name__", type(fn).__name__)


def _unwrap_annotated(typ: Any) -> Tuple[Any, Tuple[_ArgConfiguration, ...]]:
    """Examples:
    - int => (int, ())
    - Annotated[int, arg(...)] => (int, (arg(...),))
    """
    if not hasattr(typ, "__metadata__"):
        return typ, ()
    args = get_args(typ)
    return args[0], tuple(x for x in args[1:] if isinstance(x, _ArgConfiguration))


def _merge_configurations(
    confs: Tuple[_ArgConfiguration, ...],
) -> Optional[_ArgConfiguration]:
    """Later configurations take precedence, field by field."""
    if len(confs) == 0:
        return None
    merged: Dict[str, Any] = {}
    for conf in confs:
        for key, value in vars(conf).items():
            if value is not None or key not in merged:
                merged[key] = value
    return _ArgConfiguration(**merged)


def _unwrap_optional(typ: Any) -> Any:
    if get_origin(typ) in _UNION_ORIGINS:
        args = [arg for arg in get_args(typ) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return typ


def _arity_and_completion(
    typ: Any, positional: bool
) -> Tuple[int, CompletionCandidates]:
    typ = _unwrap_optional(typ)
    if typ is bool and not positional:
        return 0, NONE

    origin = get_origin(typ)
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(typ)
        inner = args[0] if len(args) > 0 else Any
        if origin is tuple and len(args) > 0 and args[-1] is not Ellipsis:
            # Fixed-length tuples, like Tuple[int, int].
            return len(args), _completion_from_type(inner)
        return (-1 if positional else 1), _completion_from_type(inner)

    return 1, _completion_from_type(typ)


def _completion_from_type(typ: Any) -> CompletionCandidates:
    typ = _unwrap_optional(typ)
    if get_origin(typ) in _LITERAL_ORIGINS:
        return FixedCompletion(
            tuple(
                choice.name if isinstance(choice, enum.Enum) else str(choice)
                for choice in get_args(typ)
            )
        )
    if inspect.isclass(typ) and issubclass(typ, enum.Enum):
        return FixedCompletion(tuple(member.name for member in typ))
    if typ is os.PathLike or get_origin(typ) is os.PathLike or (
        inspect.isclass(typ) and issubclass(typ, pathlib.PurePath)
    ):
        return PATH
    return NONE
