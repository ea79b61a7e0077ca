"""Tests for fish completion scripts."""

import subprocess

import pytest

import tabgen


def test_root_subcommands():
    command = tabgen.Command(
        "tool",
        subcommands=[
            tabgen.Command("add", help="Add things.\n\nLonger description."),
            tabgen.Command("remove"),
        ],
    )
    assert tabgen.generate_fish_completion(command) == (
        "# Command completion for tool\n"
        "# Generated by tabgen\n"
        "\n"
        "### Declaring root subcommands\n"
        "set -l tool_subcommands 'add remove'\n"
        "\n"
        "### Declaring add\n"
        "complete -f -c tool -n __fish_use_subcommand -a add -d 'Add things.'\n"
        "\n"
        "### Declaring remove\n"
        "complete -f -c tool -n __fish_use_subcommand -a remove\n"
    )


def test_root_options_only():
    command = tabgen.Command(
        "tool",
        options=[
            tabgen.Option(("-v", "--verbose"), arity=0, help="Be loud."),
            tabgen.Option("--format", completion=tabgen.FixedCompletion("json", "yaml")),
        ],
    )
    assert tabgen.generate_fish_completion(command) == (
        "# Command completion for tool\n"
        "# Generated by tabgen\n"
        "\n"
        "### Adding top level options\n"
        "complete -f -c tool -s v -l verbose -d 'Be loud.'\n"
        "complete -f -c tool -l format --require-parameter -a 'json yaml'\n"
    )


def test_root_options_with_subcommands():
    command = tabgen.Command(
        "git",
        options=[tabgen.Option("--verbose", arity=0)],
        subcommands=[
            tabgen.Command(
                "commit",
                options=[tabgen.Option(("-m", "--message"), help="Commit message.")],
            )
        ],
    )
    script = tabgen.generate_fish_completion(command)
    assert (
        'complete -f -c git -n "not __fish_seen_subcommand_from $git_subcommands"'
        " -l verbose\n"
    ) in script
    assert (
        "### Declaring commit\n"
        "complete -f -c git -n __fish_use_subcommand -a commit\n"
        "\n"
        'complete -f -c git -n "__fish_seen_subcommand_from commit" -s m -l message'
        " --require-parameter -d 'Commit message.'\n"
    ) in script


def test_nested_subcommands():
    command = tabgen.Command(
        "git",
        subcommands=[
            tabgen.Command(
                "remote",
                subcommands=[
                    tabgen.Command("add", arguments=[tabgen.Argument("url")]),
                    tabgen.Command("remove"),
                ],
            )
        ],
    )
    script = tabgen.generate_fish_completion(command)
    assert "set -l git_subcommands 'remote'\n" in script
    assert "set -l git_remote_subcommands 'add remove'\n" in script
    assert (
        'complete -f -c git -n "__fish_seen_subcommand_from remote;'
        ' and not __fish_seen_subcommand_from $git_remote_subcommands" -a add\n'
    ) in script


def test_candidates():
    command = tabgen.Command(
        "tool",
        options=[
            tabgen.Option("--file", completion=tabgen.PATH),
            tabgen.Option("--host", completion=tabgen.HOSTNAME),
            tabgen.Option("--user", completion=tabgen.USERNAME),
            tabgen.Option(
                "--branch",
                completion=tabgen.CustomCompletion.from_snippets(
                    {"fish": '"(git branch)"'}
                ),
            ),
            tabgen.Option(
                "--bash-only",
                completion=tabgen.CustomCompletion.from_snippets({"bash": "x"}),
            ),
        ],
    )
    script = tabgen.generate_fish_completion(command)
    assert '-l file --require-parameter -a "(__fish_complete_path)"\n' in script
    assert '-l host --require-parameter -a "(__fish_print_hostnames)"\n' in script
    assert '-l user --require-parameter -a "(__fish_complete_users)"\n' in script
    assert '-l branch --require-parameter -a "(git branch)"\n' in script
    assert "-l bash-only --require-parameter\n" in script


def test_unrepresentable_options_are_skipped():
    command = tabgen.Command(
        "tool",
        options=[
            tabgen.Option("+x", arity=0),
            tabgen.Option("-long", arity=0),
            tabgen.Option(("-q", "+q"), arity=0),
        ],
    )
    script = tabgen.generate_fish_completion(command)
    assert "+x" not in script
    assert "long" not in script
    assert "complete -f -c tool -s q\n" in script


def test_help_quoting():
    command = tabgen.Command(
        "tool", options=[tabgen.Option("--name", help="The user's name.")]
    )
    assert "-d 'The user\\'s name.'" in tabgen.generate_fish_completion(command)


def test_fish_empty():
    assert tabgen.generate_fish_completion(tabgen.Command("nothing")) == ""
    assert (
        tabgen.generate_fish_completion(
            tabgen.Command("args-only", arguments=[tabgen.Argument("x")])
        )
        == ""
    )
    assert (
        tabgen.generate_fish_completion(
            tabgen.Command("plus", options=[tabgen.Option("+x")])
        )
        == ""
    )


@pytest.mark.shell("fish")
def test_fish_syntax(tmp_path):
    command = tabgen.Command(
        "git",
        options=[tabgen.Option(("-v", "--verbose"), arity=0, help="Don't be quiet.")],
        subcommands=[
            tabgen.Command(
                "remote",
                help="Manage remotes.",
                subcommands=[tabgen.Command("add", options=[tabgen.Option("--tags", arity=0)])],
            )
        ],
    )
    path = tmp_path / "git.fish"
    path.write_text(tabgen.generate_fish_completion(command))
    result = subprocess.run(
        ["fish", "--no-execute", str(path)], capture_output=True, text=True
    )
    assert result.returncode == 0, result.stderr
