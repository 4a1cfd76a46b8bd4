from __future__ import annotations

from typing import Iterable, Iterator, Tuple

import numpy as np

from treelayout.geometry import Segment


class ConnectorPath:
    """Ordered, immutable sequence of parent-to-child connector segments."""

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._segments: Tuple[Segment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectorPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __repr__(self) -> str:
        return f"ConnectorPath({len(self._segments)} segments)"

    def extend(self, other: Iterable[Segment]) -> ConnectorPath:
        return ConnectorPath(self._segments + tuple(other))

    def offset_by(self, dx: float, dy: float) -> ConnectorPath:
        if dx == 0.0 and dy == 0.0:
            return self
        return ConnectorPath(segment.offset_by(dx, dy) for segment in self._segments)

    @property
    def description(self) -> str:
        """Full-precision textual form, one ``move``/``line`` pair per segment."""

        return " ".join(
            f"M {_fmt(s.start.x)} {_fmt(s.start.y)} L {_fmt(s.end.x)} {_fmt(s.end.y)}"
            for s in self._segments
        )

    def to_array(self) -> np.ndarray:
        """Return the segments as a ``(n, 2, 2)`` float array of ``[[x0, y0], [x1, y1]]``."""

        if not self._segments:
            return np.zeros((0, 2, 2), dtype=float)
        return np.array(
            [
                [[s.start.x, s.start.y], [s.end.x, s.end.y]]
                for s in self._segments
            ],
            dtype=float,
        )


def _fmt(value: float) -> str:
    return repr(float(value))
