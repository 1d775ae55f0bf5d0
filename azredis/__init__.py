"""azredis - desired-state reconciliation core for Azure Cache for Redis."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("azredis")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
