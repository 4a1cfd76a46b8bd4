from __future__ import annotations

from dataclasses import dataclass, replace
from math import isfinite

from treelayout.errors import ConfigurationError

DEFAULT_NODE_SEPARATION = 5.0
DEFAULT_ROW_SEPARATION = 40.0


@dataclass(slots=True, frozen=True)
class LayoutParameters:
    """Spacing used by the layout.

    ``node_separation`` is the horizontal gap between adjacent sibling subtrees,
    ``row_separation`` the vertical gap between a parent's content and the row
    of its children.
    """

    node_separation: float = DEFAULT_NODE_SEPARATION
    row_separation: float = DEFAULT_ROW_SEPARATION

    def __post_init__(self) -> None:
        for name in ("node_separation", "row_separation"):
            value = getattr(self, name)
            if not isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value!r}")
            if value < 0.0:
                raise ConfigurationError(f"{name} must be non-negative, got {value!r}")

    def with_overrides(self, **changes: float | None) -> LayoutParameters:
        """Return a validated copy, ignoring overrides that are ``None``."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})
