"""Learner identity for request handlers."""

from academy.auth.config import DEFAULT_USER_ID
from academy.auth.context import CurrentAuth, UserContext


__all__ = [
    "DEFAULT_USER_ID",
    "CurrentAuth",
    "UserContext",
]
