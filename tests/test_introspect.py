import enum
import pathlib
from typing import List, Optional, Tuple

import pytest
from typing_extensions import Annotated, Literal

import tabgen


class Color(enum.Enum):
    RED = enum.auto()
    GREEN = enum.auto()


def clone(
    repository: str,
    directory: pathlib.Path,
    depth: int = 1,
    dry_run: bool = False,
    color: Color = Color.RED,
    format: Literal["json", "yaml"] = "json",
    config: Optional[pathlib.Path] = None,
) -> None:
    """Clone a repository into a new directory.

    Args:
        repository: Repository to clone.
        directory: Where to clone to.
            Created if it doesn't exist.
        depth: History depth.
    """


def test_command_from_function():
    command = tabgen.command_from_function(clone)
    assert command.name == "clone"
    assert command.help == "Clone a repository into a new directory."
    assert command.arguments == (
        tabgen.Argument("repository", help="Repository to clone."),
        tabgen.Argument("directory", completion=tabgen.PATH, help="Where to clone to."),
    )
    assert command.options == (
        tabgen.Option("--depth", help="History depth."),
        tabgen.Option("--dry-run", arity=0),
        tabgen.Option("--color", completion=tabgen.FixedCompletion("RED", "GREEN")),
        tabgen.Option("--format", completion=tabgen.FixedCompletion("json", "yaml")),
        tabgen.Option("--config", completion=tabgen.PATH),
    )


def test_sequences():
    def main(
        inputs: List[pathlib.Path],
        *,
        size: Tuple[int, int] = (1, 1),
        tags: List[str] = [],
    ) -> None:
        pass

    command = tabgen.command_from_function(main, name="resize")
    assert command.name == "resize"
    assert command.arguments == (
        tabgen.Argument("inputs", arity=-1, completion=tabgen.PATH),
    )
    assert command.options == (tabgen.Option("--size", arity=2), tabgen.Option("--tags"))


def test_varargs():
    def cat(*files: pathlib.Path, number: bool = False) -> None:
        pass

    command = tabgen.command_from_function(cat)
    assert command.arguments == (
        tabgen.Argument("files", arity=-1, completion=tabgen.PATH),
    )
    assert command.vararg_name == "files"
    assert command.options == (tabgen.Option("--number", arity=0),)


def test_kwargs_warns():
    def main(x: int = 1, **kwargs: str) -> None:
        pass

    with pytest.warns(tabgen.TabgenWarning):
        command = tabgen.command_from_function(main)
    assert command.options == (tabgen.Option("--x"),)


def test_conf_arg():
    def push(
        remote: Annotated[str, tabgen.conf.arg(completion=tabgen.HOSTNAME)],
        force: Annotated[bool, tabgen.conf.arg(aliases=["-f"], help="Force it.")] = False,
        token: Annotated[str, tabgen.conf.arg(hidden=True)] = "",
        user_name: Annotated[
            str,
            tabgen.conf.arg(name="user", completion=tabgen.USERNAME),
            tabgen.conf.arg(help="Who."),
        ] = "",
    ) -> None:
        """Push.

        Args:
            force: Overridden.
        """

    command = tabgen.command_from_function(push)
    assert command.arguments == (
        tabgen.Argument("remote", completion=tabgen.HOSTNAME),
    )
    assert command.options == (
        tabgen.Option(("--force", "-f"), arity=0, help="Force it."),
        tabgen.Option("--token", hidden=True),
        tabgen.Option("--user", completion=tabgen.USERNAME, help="Who."),
    )
    assert command.visible_options == command.options[::2]


def test_conf_arg_aliases_need_hyphens():
    with pytest.raises(AssertionError):
        tabgen.conf.arg(aliases=["f"])


def test_not_callable():
    with pytest.raises(TypeError):
        tabgen.command_from_function("clone")  # type: ignore


def test_command_from_functions():
    def checkout(branch: str) -> None:
        """Switch branches."""

    def commit(message: str = "") -> None:
        pass

    git = tabgen.command_from_functions(
        "git", {"checkout": checkout, "commit": commit}, aliases={"co": ["checkout"]}
    )
    assert [sub.name for sub in git.subcommands] == ["checkout", "commit"]
    assert git.subcommands[0].help == "Switch branches."
    assert git.aliases == {"co": ("checkout",)}

    script = tabgen.generate_bash_completion(git)
    assert "_git_checkout $(( i + 1 ))" in script
    assert "local fixed_arg_names=('branch')" in script
