"""
DriftMetrics: Tracks simple statistics for the GPS drift pipeline.
"""

import threading


class DriftMetrics:
    """
    Tracks fixes received, discarded and turned into drift offsets.

    Counters are bumped from the feed, API and UI threads, so every update
    and snapshot goes through an internal lock.

    Attributes:
        received (int): Total number of fixes handed to the source.
        stale (int): Fixes discarded for exceeding the maximum age.
        dropped (int): Fixes lost to simulated signal loss.
        published (int): Drift offsets delivered to subscribers.
        errors (int): Provider errors and failing subscriber callbacks.
    """

    FIELDS = ("received", "stale", "dropped", "published", "errors")

    def __init__(self):
        """Initialize all counters to zero."""
        self._lock = threading.Lock()
        self.received = 0
        self.stale = 0
        self.dropped = 0
        self.published = 0
        self.errors = 0

    def increment(self, name: str, amount: int = 1) -> None:
        """
        Add to one counter atomically.

        Args:
            name (str): One of :attr:`FIELDS`.
            amount (int): Value to add.
        """
        if name not in self.FIELDS:
            raise ValueError(f"unknown metric {name!r}")
        with self._lock:
            setattr(self, name, getattr(self, name) + amount)

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary containing 'received', 'stale', 'dropped', 'published' and 'errors' counters.
        """
        with self._lock:
            return {name: getattr(self, name) for name in self.FIELDS}
