"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - The dataset is reached only through DatasetProvider
    - A loaded dataset is an immutable snapshot for the lifetime of one request

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - load() is async because implementations do IO; the pure core functions
      that consume its result are never async themselves
"""

from typing import Mapping, Protocol

from microcred.core.portfolio import User


class DatasetProvider(Protocol):
    """Read-only source of users keyed by lowercase user identifier."""
    async def load(self) -> Mapping[str, User]: ...
