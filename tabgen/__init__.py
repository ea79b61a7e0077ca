"""Generate bash, zsh, and fish completion scripts from a description of a command
hierarchy."""

from . import conf as conf
from ._candidates import HOSTNAME as HOSTNAME
from ._candidates import NONE as NONE
from ._candidates import PATH as PATH
from ._candidates import USERNAME as USERNAME
from ._candidates import CompletionCandidates as CompletionCandidates
from ._candidates import CustomCompletion as CustomCompletion
from ._candidates import FixedCompletion as FixedCompletion
from ._candidates import HostnameCompletion as HostnameCompletion
from ._candidates import NoCompletion as NoCompletion
from ._candidates import PathCompletion as PathCompletion
from ._candidates import ShellType as ShellType
from ._candidates import UsernameCompletion as UsernameCompletion
from ._generate import SUPPORTED_SHELLS as SUPPORTED_SHELLS
from ._generate import complete as complete
from ._generate import get_completer as get_completer
from ._generate import generate_bash_completion as generate_bash_completion
from ._generate import generate_fish_completion as generate_fish_completion
from ._generate import generate_zsh_completion as generate_zsh_completion
from ._introspect import command_from_function as command_from_function
from ._introspect import command_from_functions as command_from_functions
from ._model import Argument as Argument
from ._model import Command as Command
from ._model import Option as Option
from ._serialization import CommandSpecError as CommandSpecError
from ._serialization import command_from_dict as command_from_dict
from ._serialization import command_from_yaml as command_from_yaml
from ._settings import get_settings as get_settings
from ._settings import settings_context as settings_context
from ._warnings import TabgenWarning as TabgenWarning

# Precedence: installed distribution, then 'UNKNOWN'.
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("tabgen")
except (ImportError, PackageNotFoundError):  # pragma: no cover
    __version__ = "UNKNOWN"
