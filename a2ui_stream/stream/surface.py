"""Surface state held by the ingestion engine."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass
class Surface:
    """One independently addressable UI document."""

    surface_id: str
    components: dict[str, dict[str, Any]] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    root: str | None = None
    is_live: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Wire-style snapshot (without the id)."""
        return {
            "components": self.components,
            "data": self.data,
            "root": self.root,
            "isLive": self.is_live,
        }


@dataclass(frozen=True)
class SurfaceEvent:
    """Notification sent to subscribers after a surface changes."""

    kind: str
    surface_id: str
    path: str | None = None


class SurfaceView:
    """
    Read-only handle on a Surface.

    The view is live: it reflects later messages applied to the surface.
    ``components`` and ``data`` are read-only mappings; values nested below
    the top level are shared with the engine and must not be mutated. Use
    ``to_dict()`` for a private copy.
    """

    __slots__ = ("_surface",)

    def __init__(self, surface: Surface) -> None:
        self._surface = surface

    @property
    def surface_id(self) -> str:
        return self._surface.surface_id

    @property
    def components(self) -> Mapping[str, dict[str, Any]]:
        return MappingProxyType(self._surface.components)

    @property
    def data(self) -> Mapping[str, Any]:
        return MappingProxyType(self._surface.data)

    @property
    def root(self) -> str | None:
        return self._surface.root

    @property
    def is_live(self) -> bool:
        return self._surface.is_live

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._surface.to_dict())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SurfaceView):
            return self._surface is other._surface
        return NotImplemented

    def __hash__(self) -> int:
        return id(self._surface)

    def __repr__(self) -> str:
        return f"SurfaceView({self._surface!r})"


class SurfaceRegistryView(Mapping[str, SurfaceView]):
    """Live read-only mapping of surface id to SurfaceView."""

    def __init__(self, surfaces: Mapping[str, Surface]) -> None:
        self._surfaces = surfaces

    def __getitem__(self, surface_id: str) -> SurfaceView:
        return SurfaceView(self._surfaces[surface_id])

    def __iter__(self) -> Iterator[str]:
        return iter(self._surfaces)

    def __len__(self) -> int:
        return len(self._surfaces)
