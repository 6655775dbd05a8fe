"""Progressive reveal ("infinite scroll") controller.

Architecture:
    ``ProgressiveRevealController`` is a two-state machine (IDLE,
    LOADING_MORE) driven by discrete scroll samples. It never reads scroll
    positions itself: a ``ScrollSource`` supplies them, and ``ScrollThrottle``
    coalesces bursts of scroll events into at most one evaluation per frame.

Design Decisions:
    - The reveal callback fires on the IDLE -> LOADING_MORE edge only, so a
      burst of near-bottom samples triggers exactly one reveal
    - LOADING_MORE is left when the visible length grows or when there is
      nothing more to reveal
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ..core.constants import DEFAULT_SCROLL_THRESHOLD, PAGE_SIZE

logger = logging.getLogger(__name__)


class RevealState(str, Enum):
    """Observable controller state."""

    IDLE = "idle"
    LOADING_MORE = "loading_more"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


@dataclass(frozen=True)
class ScrollMetrics:
    """One sample of the results viewport geometry (pixels)."""

    scroll_top: float
    scroll_height: float
    viewport_height: float

    @property
    def distance_from_bottom(self) -> float:
        return self.scroll_height - self.scroll_top - self.viewport_height


class ScrollSource(Protocol):
    """Provides scroll metrics for the results viewport."""

    def get_scroll_metrics(self) -> ScrollMetrics | None: ...


def next_revealed_count(current: int, total_matching: int, page_size: int = PAGE_SIZE) -> int:
    """Grow the reveal count by one page, clamped to the match count.

    Never shrinks an existing count.
    """
    return max(current, min(current + page_size, total_matching))


class ProgressiveRevealController:
    """Decides when a scroll position should reveal the next page."""

    def __init__(
        self,
        on_reveal: Callable[[], Any],
        *,
        threshold: float = DEFAULT_SCROLL_THRESHOLD,
        has_more: bool = False,
        data_length: int = 0,
    ) -> None:
        """Initialize controller.

        Args:
            on_reveal: Called once per near-bottom episode
            threshold: Distance from the bottom edge that counts as near
            has_more: Whether more matching records can be revealed
            data_length: Current visible length
        """
        self._on_reveal = on_reveal
        self._threshold = threshold
        self._has_more = has_more
        self._data_length = data_length
        self._state = RevealState.IDLE
        self._near_bottom = False

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def loading_more(self) -> bool:
        return self._state == RevealState.LOADING_MORE

    @property
    def is_near_bottom(self) -> bool:
        """Result of the last evaluated sample."""
        return self._near_bottom

    @property
    def threshold(self) -> float:
        return self._threshold

    def on_scroll(self, metrics: ScrollMetrics) -> bool:
        """Evaluate one scroll sample.

        Returns:
            True if this sample triggered a reveal
        """
        if not self._has_more or self._state == RevealState.LOADING_MORE:
            return False

        self._near_bottom = metrics.distance_from_bottom <= self._threshold
        if not self._near_bottom:
            return False

        self._state = RevealState.LOADING_MORE
        self._on_reveal()
        return True

    def update(self, *, has_more: bool, data_length: int) -> None:
        """Report the view's current size after a render."""
        grew = data_length > self._data_length
        self._has_more = has_more
        self._data_length = data_length
        if self._state == RevealState.LOADING_MORE and (grew or not has_more):
            self._state = RevealState.IDLE

    def reset(self, *, has_more: bool, data_length: int) -> None:
        """Return to IDLE for a new result set (filter or search changed)."""
        self._has_more = has_more
        self._data_length = data_length
        self._state = RevealState.IDLE
        self._near_bottom = False


class ScrollThrottle:
    """Coalesces scroll events to one controller evaluation per frame.

    ``notify`` may be called any number of times; the sample is read from the
    source when the scheduled frame callback runs.
    """

    def __init__(
        self,
        controller: ProgressiveRevealController,
        source: ScrollSource,
        *,
        schedule: Callable[[Callable[[], None]], Any] | None = None,
    ) -> None:
        """Initialize throttle.

        Args:
            controller: Controller to feed
            source: Scroll metrics provider
            schedule: Frame scheduler (defaults to the running loop's ``call_soon``)
        """
        self._controller = controller
        self._source = source
        self._schedule = schedule
        self._handle: Any = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def notify(self) -> None:
        """Record that a scroll event happened."""
        if self._pending:
            return
        self._pending = True
        schedule = self._schedule or asyncio.get_running_loop().call_soon
        self._handle = schedule(self._flush)

    def _flush(self) -> None:
        self._pending = False
        self._handle = None
        metrics = self._source.get_scroll_metrics()
        if metrics is None:
            logger.debug("No scroll metrics available")
            return
        self._controller.on_scroll(metrics)

    def cancel(self) -> None:
        """Drop a pending evaluation."""
        handle = self._handle
        if handle is not None and hasattr(handle, "cancel"):
            handle.cancel()
        self._handle = None
        self._pending = False
