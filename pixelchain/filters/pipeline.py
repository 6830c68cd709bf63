# pixelchain Filters - Pipeline
"""
FilterChain for applying filters in user-specified order.

The chain remembers how far its last render got (the render cursor). A
render only runs the filters appended since then, on top of the previous
result. Removing a filter that was already applied resets the cursor so the
next render starts again from the original raster.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator
import logging
import re

from .base import Filter
from ..errors import ChainIndexError
from ..raster import Raster

logger = logging.getLogger(__name__)

NO_FILTERS_MESSAGE = 'No filters.'


@dataclass
class FilterChain:
    """Ordered, mutable sequence of filters with a render cursor.

    ``render_cursor`` is the number of leading filters whose effect is
    contained in the last rendered raster. It equals ``len(filters)`` right
    after a render and drops to 0 when an already applied filter is removed.
    """
    filters: list[Filter] = field(default_factory=list)
    render_cursor: int = 0

    def add(self, filter: Filter) -> 'FilterChain':
        """Append a filter (chainable). The render cursor is unchanged."""
        self.filters.append(filter)
        logger.debug(f"Added {filter.describe()} at index {len(self.filters) - 1}")
        return self

    def extend(self, filters: list[Filter]) -> 'FilterChain':
        """Append multiple filters (chainable)."""
        for f in filters:
            self.add(f)
        return self

    def remove(self, index: int) -> Filter:
        """Remove and return the filter at ``index``.

        Removing a filter the last render already applied invalidates the
        cached result, so the cursor falls back to 0.

        Raises ChainIndexError if the index is out of range; the chain is
        left unmodified in that case.
        """
        if not 0 <= index < len(self.filters):
            raise ChainIndexError(
                f"Filter index {index} out of range, chain has {len(self.filters)} filters"
            )
        removed = self.filters.pop(index)
        if index < self.render_cursor:
            self.render_cursor = 0
        logger.debug(
            f"Removed {removed.describe()} at index {index}, render cursor {self.render_cursor}"
        )
        return removed

    def render(self, base: Raster, cached: Raster | None = None) -> Raster:
        """Render the chain, reusing the previous result where possible.

        :param base: The original raster.
        :param cached: The result of the previous render. Required for an
            incremental render; without it the whole chain is applied to
            ``base``.
        :returns: The rendered raster. Afterwards the cursor equals the chain
            length.
        """
        if self.render_cursor == 0 or cached is None:
            start, result = 0, base
        else:
            start, result = self.render_cursor, cached

        pending = self.filters[start:]
        logger.debug(
            f"{'Incremental' if start else 'Full'} render: "
            f"applying {len(pending)} of {len(self.filters)} filters"
        )
        for f in pending:
            result = f.apply(result)

        self.render_cursor = len(self.filters)
        return result

    def apply(self, raster: Raster) -> Raster:
        """Apply every filter in sequence without touching the cursor."""
        result = raster
        for f in self.filters:
            result = f.apply(result)
        return result

    def describe(self) -> str:
        """Index-prefixed listing of all filters, one per line."""
        if not self.filters:
            return NO_FILTERS_MESSAGE
        return '\n'.join(f'{i} {f.describe()}' for i, f in enumerate(self.filters))

    @property
    def is_clean(self) -> bool:
        """True if the last render covers every filter in the chain."""
        return self.render_cursor == len(self.filters)

    def clear(self) -> None:
        """Remove all filters and reset the cursor."""
        self.filters.clear()
        self.render_cursor = 0

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def __getitem__(self, index: int) -> Filter:
        return self.filters[index]

    @classmethod
    def parse(cls, text: str) -> 'FilterChain':
        """Parse filter string into a chain.

        Examples:
            'blur 3 box|invert'
            'threshold(100); sepia'
        """
        if not text:
            return cls()

        filters = []
        # Split by | or ;
        for part in re.split(r'[|;]', text):
            part = part.strip()
            if not part:
                continue
            filters.append(Filter.parse(part))

        return cls(filters=filters)

    def to_string(self) -> str:
        """Convert chain to compact string format."""
        return '|'.join(f.to_string() for f in self.filters)
