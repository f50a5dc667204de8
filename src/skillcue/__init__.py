"""skillcue: surface the right Claude Code skills for each prompt."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skillcue")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
