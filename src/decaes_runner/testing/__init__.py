"""Testing utilities and fakes for the DECAES runner."""

from .fakes import FakeLauncher, LaunchRecord

__all__ = [
    "FakeLauncher",
    "LaunchRecord",
]
