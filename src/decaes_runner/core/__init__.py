"""Core components of the DECAES runner."""

from .logging_config import configure_cli_logging, get_logger, setup_logger
from .exceptions import (
    DecaesRunnerError,
    ConfigurationError,
    InvalidThreadCount,
    InvalidArgumentType,
    UnsupportedArgumentType,
    MissingInputError,
    ToolNotFound,
    with_error_handling,
)
from .models import RunnerConfig
from .threads import check_nthreads
from .arguments import (
    Argument,
    FlagArgument,
    NumberArgument,
    NumberArrayArgument,
    TextArgument,
    classify_argument,
    format_number,
    serialize_arguments,
)
from .bootstrap import render_bootstrap_script, temporary_script
from .runner import (
    build_command,
    build_environment,
    dry_run_decaes,
    format_command,
    prepare_invocation,
    run_decaes,
    subprocess_launcher,
)

__all__ = [
    "RunnerConfig",
    "check_nthreads",
    "Argument",
    "TextArgument",
    "FlagArgument",
    "NumberArgument",
    "NumberArrayArgument",
    "classify_argument",
    "format_number",
    "serialize_arguments",
    "render_bootstrap_script",
    "temporary_script",
    "build_command",
    "build_environment",
    "format_command",
    "prepare_invocation",
    "dry_run_decaes",
    "run_decaes",
    "subprocess_launcher",
    "setup_logger",
    "get_logger",
    "configure_cli_logging",
    "DecaesRunnerError",
    "ConfigurationError",
    "InvalidThreadCount",
    "InvalidArgumentType",
    "UnsupportedArgumentType",
    "MissingInputError",
    "ToolNotFound",
    "with_error_handling",
]
