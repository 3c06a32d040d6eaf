"""Shared configuration models for the DECAES runner."""

import os
import shlex
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class RunnerConfig(BaseModel):
    """Configuration for launching the DECAES command line tool."""

    julia_binary: str = "julia"
    julia_flags: List[str] = Field(
        default_factory=lambda: ["--startup-file=no", "-O3"]
    )
    package: str = "DECAES"
    threads_env_var: str = "JULIA_NUM_THREADS"
    script_suffix: str = ".jl"
    temp_dir: Optional[str] = None
    debug: bool = False

    @field_validator("julia_binary", "package", "threads_env_var")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "RunnerConfig":
        """
        Build a config from ``DECAES_*`` environment variables.

        Environment Variables:
            DECAES_JULIA_BINARY: Julia executable name or path
            DECAES_JULIA_FLAGS: Julia flags, split with shell rules
            DECAES_PACKAGE: Julia package providing ``main()``
            DECAES_TEMP_DIR: Directory for the bootstrap script

        Keyword overrides win over the environment.
        """
        environ = os.environ if environ is None else environ
        values = {}
        if environ.get("DECAES_JULIA_BINARY"):
            values["julia_binary"] = environ["DECAES_JULIA_BINARY"]
        if "DECAES_JULIA_FLAGS" in environ:
            values["julia_flags"] = shlex.split(environ["DECAES_JULIA_FLAGS"])
        if environ.get("DECAES_PACKAGE"):
            values["package"] = environ["DECAES_PACKAGE"]
        if environ.get("DECAES_TEMP_DIR"):
            values["temp_dir"] = environ["DECAES_TEMP_DIR"]
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid runner configuration: {exc}") from exc
