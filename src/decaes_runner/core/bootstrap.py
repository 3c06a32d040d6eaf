"""Temporary Julia entry point script."""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .logging_config import get_logger
from .models import RunnerConfig

logger = get_logger("decaes-runner")


def render_bootstrap_script(package: str = "DECAES") -> str:
    """Julia source that loads ``package``, installing it if needed, then calls ``main()``."""
    return (
        "import Pkg\n"
        "try\n"
        f"    @eval using {package}\n"
        "catch e\n"
        f'    Pkg.add("{package}")\n'
        f"    @eval using {package}\n"
        "end\n"
        "main()\n"
    )


@contextmanager
def temporary_script(config: RunnerConfig) -> Iterator[Path]:
    """
    Write the bootstrap script to a uniquely named file for one invocation.

    The file is removed when the block exits, whether or not it raised.
    A file already removed by someone else is not an error.
    """
    fd, name = tempfile.mkstemp(
        prefix="decaes_", suffix=config.script_suffix, dir=config.temp_dir
    )
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(render_bootstrap_script(config.package))
        logger.debug(f"Wrote bootstrap script {path}")
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed bootstrap script {path}")
