"""Bionic reading emphasis for HTML documents."""

# Importing the passes package registers every pass with the framework.
from . import passes  # noqa: F401
from .driver import run

__all__ = ["run"]
