"""Decides once per render pass whether the selected parameters need a refetch."""

from scoreboard.services.scores import QueryParameters


class ParameterChangeDetector:
    """Tracks the parameters of the last issued request.

    ``active`` is ``None`` until the first check, and again after
    ``force_stale()``; ``None`` never equals a selection, so the next check
    reports stale.
    """

    def __init__(self, active: QueryParameters | None = None) -> None:
        self._active = active

    @property
    def active(self) -> QueryParameters | None:
        return self._active

    def check(self, selected: QueryParameters) -> bool:
        """Adopt ``selected`` and return True if it differs from ``active``."""
        if self._active == selected:
            return False
        self._active = selected
        return True

    def force_stale(self) -> None:
        self._active = None
