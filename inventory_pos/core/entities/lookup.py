"""Explicit lookup terms for finder methods.

A finder receives either ``ById`` or ``ByName``; a numeric-looking name is
still a name.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ById:
    id: int


@dataclass(frozen=True)
class ByName:
    name: str


Lookup = ById | ByName


def describe(lookup: Lookup) -> int | str:
    """Return the raw term, for error messages."""
    return lookup.id if isinstance(lookup, ById) else lookup.name
