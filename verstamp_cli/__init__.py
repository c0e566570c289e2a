"""
VerStamp CLI Package

A Rich-based CLI for generating, checking and inspecting build version
artifacts.
"""

from .main import app
from _version import __version__, get_full_version

__all__ = ["app", "__version__", "get_full_version"]
