"""Launch the DECAES command line tool through Julia."""

import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .arguments import serialize_arguments
from .bootstrap import temporary_script
from .exceptions import MissingInputError, ToolNotFound, with_error_handling
from .logging_config import get_logger
from .models import RunnerConfig
from .protocols import LauncherProtocol
from .threads import check_nthreads

logger = get_logger("decaes-runner")


def subprocess_launcher(argv: List[str], env: Dict[str, str]) -> int:
    """Run ``argv`` with inherited stdin/stdout/stderr and wait for it."""
    return subprocess.call(argv, env=env)  # noqa: S603


def build_command(config: RunnerConfig, script_path: Path, tokens: List[str]) -> List[str]:
    return [config.julia_binary, *config.julia_flags, str(script_path), *tokens]


def format_command(argv: List[str]) -> str:
    return shlex.join(argv)


def build_environment(
    config: RunnerConfig, nthreads: str, base: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Child environment: a copy of ``base`` (default ``os.environ``) plus the thread count."""
    env = dict(os.environ if base is None else base)
    env[config.threads_env_var] = nthreads
    return env


def prepare_invocation(nthreads: Any, args: Sequence[Any]) -> Tuple[str, List[str]]:
    """Validate the thread count and serialize ``args``; nothing is written or started."""
    threads = check_nthreads(nthreads)
    if not args:
        raise MissingInputError("Must specify input image or settings file")
    return threads, serialize_arguments(args)


@with_error_handling
def dry_run_decaes(nthreads: Any, *args: Any, config: Optional[RunnerConfig] = None) -> str:
    """
    Describe the command ``run_decaes`` would launch, without launching it.

    No bootstrap script is written; its path is shown as a placeholder in
    the directory the real script would use.
    """
    config = config if config is not None else RunnerConfig.from_env()
    threads, tokens = prepare_invocation(nthreads, args)
    script = Path(config.temp_dir or tempfile.gettempdir()) / f"decaes_XXXXXXXX{config.script_suffix}"
    argv = build_command(config, script, tokens)
    logger.info(f"Dry run with {threads} thread(s); DECAES not started")
    return f"{config.threads_env_var}={threads} {format_command(argv)}"


@with_error_handling
def run_decaes(
    nthreads: Any,
    *args: Any,
    return_status: bool = False,
    config: Optional[RunnerConfig] = None,
    launcher: Optional[LauncherProtocol] = None,
) -> Optional[int]:
    """
    Run DECAES with ``nthreads`` Julia threads, forwarding ``args``.

    Args:
        nthreads: Number of Julia threads, as an integer or integer text.
        *args: Input image or ``@settings.txt`` file followed by flag/value
            arguments. Text is forwarded as is, booleans as 0/1, numbers as
            one token and numeric arrays as one token per element.
        return_status: Return the child's exit status when true.
        config: Runner configuration; read from the environment if omitted.
        launcher: Process launcher; blocking ``subprocess`` call if omitted.

    Returns:
        The exit status if ``return_status`` is true, otherwise None. A
        non-zero status is returned, not raised.

    Raises:
        InvalidThreadCount, InvalidArgumentType: Bad thread count.
        MissingInputError: No arguments were given.
        UnsupportedArgumentType: An argument cannot be serialized.
        ToolNotFound: The Julia executable is not on the search path.

    Example:
        >>> run_decaes(4, "image.nii.gz", "--T2map", "--TE", 7e-3,
        ...            "--nT2", 60, "--T2Range", [10e-3, 2.0])  # doctest: +SKIP
    """
    config = config if config is not None else RunnerConfig.from_env()
    launcher = launcher if launcher is not None else subprocess_launcher

    threads, tokens = prepare_invocation(nthreads, args)
    env = build_environment(config, threads)

    with temporary_script(config) as script:
        argv = build_command(config, script, tokens)
        logger.info(f"Running DECAES with {threads} thread(s)")
        logger.debug(f"Command: {format_command(argv)}")
        try:
            status = launcher(argv, env)
        except ToolNotFound:
            raise
        except FileNotFoundError as exc:
            raise ToolNotFound(config.julia_binary) from exc

    if status != 0:
        logger.warning(f"DECAES exited with status {status}")
    else:
        logger.info("DECAES finished")

    return status if return_status else None
