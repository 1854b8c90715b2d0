"""In-memory record of which findings have been resolved in this analysis."""

from __future__ import annotations

from typing import Iterator


class ResolutionTracker:
    """Maps finding fingerprints to a resolved flag.

    The tracker only lives as long as one analysis snapshot: offsets from an
    earlier analysis mean nothing once the buffer has changed, so it must be
    reset (not merged) whenever new content is analysed. Nothing is
    persisted.
    """

    def __init__(self) -> None:
        self._resolved: dict[str, bool] = {}

    def mark_resolved(self, fingerprint: str) -> None:
        self._resolved[fingerprint] = True

    def is_resolved(self, fingerprint: str) -> bool:
        return self._resolved.get(fingerprint, False)

    def reset(self) -> None:
        self._resolved.clear()

    def resolved_fingerprints(self) -> list[str]:
        """Return resolved fingerprints in the order they were first marked."""

        return [key for key, resolved in self._resolved.items() if resolved]

    def __contains__(self, fingerprint: object) -> bool:
        return isinstance(fingerprint, str) and self.is_resolved(fingerprint)

    def __iter__(self) -> Iterator[str]:
        return iter(self.resolved_fingerprints())

    def __len__(self) -> int:
        return len(self.resolved_fingerprints())
