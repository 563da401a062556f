"""Shared pytest fixtures and helpers for inventory tests."""

from .books import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
