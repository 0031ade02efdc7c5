"""Per-invocation menu session and its two surface slots."""

from __future__ import annotations

from dataclasses import dataclass, field

from ca_ui.menu.geometry import WindowGeometry
from ca_ui.menu.partition import PartitionedActions


@dataclass
class SurfaceState:
    """Handles for one surface; each field is independently nullable."""

    content: int | None = None
    surface: int | None = None
    geometry: WindowGeometry | None = None

    @property
    def is_open(self) -> bool:
        return self.surface is not None

    def clear(self) -> None:
        """Forget all handles. The surface itself is not touched."""
        self.content = None
        self.surface = None
        self.geometry = None

    def detach(self) -> int | None:
        """Release the slot and hand back the surface for the caller to destroy.

        Every teardown path detaches first and destroys second, so callbacks
        fired while the surface is destroyed never see a stale handle.
        """
        surface = self.surface
        self.clear()
        return surface


@dataclass
class MenuSession:
    """State of one selection flow, from partitioning to cleanup."""

    actions: PartitionedActions | None = None
    active_group_index: int | None = None
    primary: SurfaceState = field(default_factory=SurfaceState)
    secondary: SurfaceState = field(default_factory=SurfaceState)
    origin_focus: int | None = None
    closed: bool = False

    def reset(self) -> None:
        self.actions = None
        self.active_group_index = None
        self.primary.clear()
        self.secondary.clear()
        self.closed = True
