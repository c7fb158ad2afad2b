"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    User roles known to the case engine.

    - VOLUNTEER: Advocate assigned to cases
    """

    VOLUNTEER = "volunteer"


DEFAULT_ROLE = Role.VOLUNTEER.value
