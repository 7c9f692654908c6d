"""Domain entity representing the authenticated caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Identity resolved from a verified access token."""

    id: str
    name: str = ""
    email: str = ""
