"""Run the DECAES.jl command line tool from Python."""

from .core import RunnerConfig, run_decaes

__version__ = "0.1.0"

__all__ = ["RunnerConfig", "run_decaes", "__version__"]
