"""
Message dispatcher - applies A2UI messages to a surface registry.

Every write for one message is computed before the registry is touched,
so readers never observe a partially applied message.
"""
from __future__ import annotations

import logging
from typing import Any, MutableMapping

from ..protocol.error_codes import InvalidMessageError
from ..protocol.messages import (
    A2UIMessage,
    BeginRendering,
    DataModelUpdate,
    DeleteSurface,
    SurfaceUpdate,
    parse_message,
)
from ..protocol.values import MISSING
from .surface import Surface, SurfaceEvent

logger = logging.getLogger(__name__)

_MESSAGE_MODELS = (SurfaceUpdate, DataModelUpdate, BeginRendering, DeleteSurface)


class MessageDispatcher:
    """
    Applies structured messages to a ``{surface_id: Surface}`` registry.

    Rejected messages are logged and dropped; the registry is left as it was.
    """

    def apply(
        self,
        message: A2UIMessage | dict[str, Any],
        surfaces: MutableMapping[str, Surface],
    ) -> SurfaceEvent | None:
        """
        Apply one message.

        Args:
            message: Parsed message, or the raw decoded JSONL object
            surfaces: Registry to mutate

        Returns:
            Event describing the change, or None if nothing was applied
        """
        if not isinstance(message, _MESSAGE_MODELS):
            try:
                message = parse_message(message)
            except InvalidMessageError as e:
                logger.warning(f"[A2UI] Dropping message ({e.error_code.value}): {e}")
                return None

        surface_id = message.surfaceId

        if isinstance(message, DeleteSurface):
            return self._delete(surface_id, surfaces)

        if isinstance(message, SurfaceUpdate):
            self._apply_surface_update(message, surfaces)
        elif isinstance(message, DataModelUpdate):
            self._apply_data_model_update(message, surfaces)
        elif isinstance(message, BeginRendering):
            self._apply_begin_rendering(message, surfaces)
        else:
            logger.warning(f"[A2UI] Unhandled message type: {type(message).__name__}")
            return None

        return SurfaceEvent(kind=message.kind, surface_id=surface_id)

    def _get_or_create(self, surface_id: str, surfaces: MutableMapping[str, Surface]) -> Surface:
        existing = surfaces.get(surface_id)
        if existing is not None:
            return existing
        surface = Surface(surface_id=surface_id)
        surfaces[surface_id] = surface
        logger.debug(f"[A2UI] Created surface {surface_id}")
        return surface

    def _apply_surface_update(
        self,
        message: SurfaceUpdate,
        surfaces: MutableMapping[str, Surface],
    ) -> None:
        updates = {entry.id: entry.component for entry in message.components}
        surface = self._get_or_create(message.surfaceId, surfaces)
        surface.components.update(updates)
        logger.debug(f"[A2UI] {message.surfaceId}: {len(updates)} component(s) updated")

    def _apply_data_model_update(
        self,
        message: DataModelUpdate,
        surfaces: MutableMapping[str, Surface],
    ) -> None:
        updates: dict[str, Any] = {}
        for entry in message.contents:
            value = entry.decode()
            if value is MISSING:
                logger.warning(
                    f"[A2UI] {message.surfaceId}: data entry '{entry.key}' has no value tag, skipped"
                )
                continue
            updates[entry.key] = value

        surface = self._get_or_create(message.surfaceId, surfaces)
        surface.data.update(updates)
        logger.debug(f"[A2UI] {message.surfaceId}: {len(updates)} data key(s) updated")

    def _apply_begin_rendering(
        self,
        message: BeginRendering,
        surfaces: MutableMapping[str, Surface],
    ) -> None:
        surface = self._get_or_create(message.surfaceId, surfaces)
        surface.root = message.root
        surface.is_live = True
        logger.debug(f"[A2UI] {message.surfaceId}: rendering from root {message.root}")

    def _delete(self, surface_id: str, surfaces: MutableMapping[str, Surface]) -> SurfaceEvent | None:
        if surfaces.pop(surface_id, None) is None:
            return None
        logger.debug(f"[A2UI] Deleted surface {surface_id}")
        return SurfaceEvent(kind=DeleteSurface.kind, surface_id=surface_id)


__all__ = [
    "MessageDispatcher",
]
