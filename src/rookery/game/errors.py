"""Exceptions raised by the game layer."""

from __future__ import annotations


class IllegalMoveError(ValueError):
    """Raised when a move is not a current candidate for the side to move."""


class PromotionStateError(RuntimeError):
    """Raised when a move arrives while a promotion is pending, or a
    promotion choice arrives while none is pending."""
