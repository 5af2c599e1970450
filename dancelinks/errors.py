# errors.py
# Exceptions raised by the solver and its adapters

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised synchronously when a matrix or argument cannot be solved."""
