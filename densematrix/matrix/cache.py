"""
Sticky compute cache.

Each owning matrix memoizes its expensive derived quantities. Validity is
tracked per quantity with a Cached flag set, but invalidation is coarse:
any mutation clears every flag at once. There is no per-cell dependency
tracking.

State machine per quantity:
    Invalid --store()--> Valid
    Valid   --clear()--> Invalid   (every quantity at once)
    Valid   --get()----> Valid     (no recomputation)
"""

from __future__ import annotations

import enum
from typing import Any


class Cached(enum.Flag):
    """Derived quantities tracked by the sticky cache."""
    NONE = 0
    DIAG = enum.auto()
    DET = enum.auto()
    INV = enum.auto()


class StickyCache:
    """
    Validity mask plus stored values for one matrix instance.

    The cache never copies: callers that hand cached matrices to users
    must copy them on the way out.
    """

    __slots__ = ('_mask', '_values')

    def __init__(self):
        self._mask = Cached.NONE
        self._values: dict[Cached, Any] = {}

    @property
    def mask(self) -> Cached:
        """Flags of the quantities currently valid."""
        return self._mask

    def valid(self, quantity: Cached) -> bool:
        return bool(self._mask & quantity)

    def get(self, quantity: Cached) -> Any:
        """
        Stored value of a valid quantity.

        Raises:
            KeyError: If the quantity is not currently valid
        """
        if not self.valid(quantity):
            raise KeyError(quantity)
        return self._values[quantity]

    def store(self, quantity: Cached, value: Any) -> None:
        self._values[quantity] = value
        self._mask |= quantity

    def clear(self) -> None:
        """Invalidate every quantity."""
        self._mask = Cached.NONE
        self._values.clear()
