"""Now Playing Badge service"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("now-playing-badge")
except PackageNotFoundError:
    __version__ = "dev"
