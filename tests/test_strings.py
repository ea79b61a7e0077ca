from tabgen import _strings


def test_wordify():
    assert _strings.wordify("set-url") == "set_url"
    assert _strings.wordify("a.b/c d") == "a_b_c_d"
    assert _strings.wordify("plain123") == "plain123"


def test_completion_function_name():
    assert _strings.completion_function_name(["git"]) == "_git"
    assert (
        _strings.completion_function_name(["git", "remote", "set-url"])
        == "_git_remote_set_url"
    )
    assert _strings.completion_function_name(["my-tool", "sub"]) == "_my_tool_sub"


def test_custom_completion_function_name():
    assert (
        _strings.custom_completion_function_name("_git", "--author")
        == "__git_complete___author"
    )
    assert (
        _strings.custom_completion_function_name("_git_add", "paths")
        == "__git_add_complete_paths"
    )


def test_fish_subcommands_variable_name():
    assert _strings.fish_subcommands_variable_name(["git"]) == "git_subcommands"
    assert (
        _strings.fish_subcommands_variable_name(["git", "remote"])
        == "git_remote_subcommands"
    )
    assert (
        _strings.fish_subcommands_variable_name(["my-tool"]) == "my_tool_subcommands"
    )


def test_hyphen_separated_from_snake_case():
    assert _strings.hyphen_separated_from_snake_case("dry_run") == "dry-run"
    assert _strings.hyphen_separated_from_snake_case("_private_thing") == "private-thing"
    assert _strings.hyphen_separated_from_snake_case("plain") == "plain"
    assert _strings.hyphen_separated_from_snake_case("_") == "_"


def test_first_line():
    assert _strings.first_line("") == ""
    assert _strings.first_line("Hello.") == "Hello."
    assert _strings.first_line("\n\n  Hello.\n  More text.\n") == "Hello."


def test_indent_snippet():
    snippet = """
        COMPREPLY=(a b)
        if true; then
          echo
        fi
    """
    assert _strings.indent_snippet(snippet) == (
        "  COMPREPLY=(a b)\n  if true; then\n    echo\n  fi"
    )


def test_bash_quote():
    assert _strings.bash_quote("") == "''"
    assert _strings.bash_quote("a b") == "'a b'"
    assert _strings.bash_quote("it's") == "'it'\\''s'"


def test_bash_word():
    assert _strings.bash_word("commit") == "commit"
    assert _strings.bash_word("--verbose") == "--verbose"
    assert _strings.bash_word("a b") == "'a b'"


def test_fish_quote():
    assert _strings.fish_quote("plain") == "'plain'"
    assert _strings.fish_quote("it's") == "'it\\'s'"
    assert _strings.fish_quote("back\\slash") == "'back\\\\slash'"
