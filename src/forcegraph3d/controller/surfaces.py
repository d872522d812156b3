"""
Drawing surface registry.

Hosts register their drawing surfaces (e.g. a GraphCanvas widget) under an
id; the visualizer looks the surface up by that id when it is constructed.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    """Anything that reports a pixel size. QWidget satisfies this."""
    def width(self) -> int: ...
    def height(self) -> int: ...


class SurfaceNotFoundError(LookupError):
    """Raised when no drawing surface is registered under the requested id."""


_REGISTRY: dict[str, DrawingSurface] = {}


def register_surface(surface_id: str, surface: DrawingSurface, replace: bool = False) -> DrawingSurface:
    if not surface_id:
        raise ValueError("Surface id must be a non-empty string.")
    if surface_id in _REGISTRY and not replace:
        raise KeyError(f"A drawing surface is already registered as '{surface_id}'.")
    _REGISTRY[surface_id] = surface
    logger.debug(f"Registered drawing surface '{surface_id}'.")
    return surface


def unregister_surface(surface_id: str) -> None:
    _REGISTRY.pop(surface_id, None)


def resolve_surface(
    surface_id: str,
    surfaces: Optional[Mapping[str, DrawingSurface]] = None,
) -> DrawingSurface:
    """
    Find a drawing surface by id.

    Args:
        surface_id: The id to look up.
        surfaces: Explicit lookup table; the global registry is used when omitted.

    Raises:
        SurfaceNotFoundError: If no surface has this id.
    """
    table = _REGISTRY if surfaces is None else surfaces
    surface = table.get(surface_id)
    if surface is None:
        raise SurfaceNotFoundError(f'Drawing surface with id "{surface_id}" not found.')
    return surface
