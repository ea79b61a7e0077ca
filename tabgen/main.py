import argparse
import dataclasses
import inspect
import logging
import os
import sys
from importlib import import_module
from typing import List, Optional

import shtab
import termcolor

from . import __version__
from ._generate import SUPPORTED_SHELLS, complete
from ._introspect import command_from_function
from ._model import Command
from ._serialization import CommandSpecError, command_from_yaml

log = logging.getLogger(__name__)

_SPEC_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def get_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabgen",
        description="Print a shell completion script for a command tree.",
    )
    parser.add_argument(
        "source",
        help="YAML/JSON file describing the command tree, or an importable"
        " `module.attribute` naming a tabgen.Command, a function returning one, or a"
        " function to describe",
    ).complete = shtab.FILE  # type: ignore
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "-s", "--shell", default=SUPPORTED_SHELLS[0], choices=SUPPORTED_SHELLS
    )
    parser.add_argument(
        "--prog", help="custom program name (overrides the root command's name)"
    )
    parser.add_argument(
        "-o", "--output", help="write the script here instead of to stdout"
    ).complete = shtab.FILE  # type: ignore
    parser.add_argument(
        "-u",
        "--error-unimportable",
        default=False,
        action="store_true",
        help="raise errors if `source` can't be imported",
    )
    parser.add_argument(
        "--verbose",
        dest="loglevel",
        action="store_const",
        default=logging.INFO,
        const=logging.DEBUG,
        help="Log debug information",
    )
    shtab.add_argument_to(parser, "--print-own-completion")
    return parser


def load_command(source: str, error_unimportable: bool = False) -> Optional[Command]:
    """Resolve the `source` argument to a command tree. Returns None when the module
    can't be imported and `error_unimportable` is False."""
    if source.endswith(_SPEC_FILE_SUFFIXES) or os.path.isfile(source):
        with open(source, "r", encoding="utf-8") as f:
            return command_from_yaml(f)

    if "." not in source:
        raise CommandSpecError(
            f"{source}: expected a file or an importable `module.attribute`"
        )
    module_name, attribute = source.rsplit(".", 1)
    if sys.path and sys.path[0]:
        # not blank so not searching curdir
        sys.path.insert(1, os.curdir)
    try:
        module = import_module(module_name)
    except ImportError as err:
        if error_unimportable:
            raise
        log.debug(str(err))
        return None

    target = getattr(module, attribute)
    if isinstance(target, Command):
        return target
    if not callable(target):
        raise CommandSpecError(f"{source}: expected a tabgen.Command or a callable")

    # Factories take no arguments and return a command. Anything else is described.
    try:
        produced = target() if _takes_no_arguments(target) else None
    except TypeError:
        produced = None
    if isinstance(produced, Command):
        return produced
    return command_from_function(target)


def _takes_no_arguments(fn) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in signature.parameters.values()
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = get_main_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.loglevel)
    log.debug(args)

    try:
        command = load_command(args.source, error_unimportable=args.error_unimportable)
    except (CommandSpecError, OSError, AttributeError) as e:
        print(termcolor.colored(f"error: {e}", "red"), file=sys.stderr)
        return 1
    if command is None:
        return 0

    if args.prog:
        command = dataclasses.replace(command, name=args.prog)

    script = complete(command, shell=args.shell)
    if args.output:
        log.info(
            "Writing %s completion for %s to %s", args.shell, command.name, args.output
        )
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(script)
    else:
        print(script, end="")
    return 0
