"""saftos-preflight — hardware requirement checks for the installer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("saftos-preflight")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
