"""The :mod:`tabgen.conf` submodule contains helpers for attaching completion-specific
configuration to function parameters via [PEP 593](https://peps.python.org/pep-0593/)
runtime annotations. Only used by :func:`tabgen.command_from_function`."""

import dataclasses
from typing import Any, Optional, Sequence, Tuple

from ._candidates import CompletionCandidates


@dataclasses.dataclass(frozen=True)
class _ArgConfiguration:
    # A None value means "don't overwrite what was inferred".
    name: Optional[str]
    aliases: Optional[Tuple[str, ...]]
    help: Optional[str]
    arity: Optional[int]
    completion: Optional[CompletionCandidates]
    hidden: Optional[bool]

    def __hash__(self) -> int:
        return object.__hash__(self)


def arg(
    *,
    name: Optional[str] = None,
    aliases: Optional[Sequence[str]] = None,
    help: Optional[str] = None,
    arity: Optional[int] = None,
    completion: Optional[CompletionCandidates] = None,
    hidden: Optional[bool] = None,
) -> Any:
    """Returns a metadata object for overriding what is inferred from a parameter.

    ```python
    def push(
        remote: Annotated[str, tabgen.conf.arg(completion=tabgen.HOSTNAME)],
        force: Annotated[bool, tabgen.conf.arg(aliases=["-f"])] = False,
    ) -> None:
        ...
    ```

    Arguments:
        name: A new name for the parameter. For options, this should not include
            the leading hyphens.
        aliases: Extra option names. All strings in the sequence should start with
            a hyphen (-). Ignored for positional arguments.
        help: Helptext. The docstring is used by default.
        arity: Number of values consumed. Inferred from the annotation by default.
        completion: Where suggestions come from. Inferred from the annotation by
            default.
        hidden: Whether to leave the option out of completion scripts.

    Returns:
        Object to attach via `typing.Annotated[]`.
    """
    if aliases is not None:
        for alias in aliases:
            assert alias.startswith("-"), "Option alias needs to start with a hyphen!"

    return _ArgConfiguration(
        name=name,
        aliases=tuple(aliases) if aliases is not None else None,
        help=help,
        arity=arity,
        completion=completion,
        hidden=hidden,
    )
