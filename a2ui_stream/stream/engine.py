"""
Ingestion engine - turns an agent's token stream into surface state.

An agent reply starts as free text and switches, after a fixed delimiter,
to a JSONL body of A2UI messages:

    Here is your dashboard.---a2ui_JSON---
    {"surfaceUpdate": {"surfaceId": "main", "components": [...]}}
    {"beginRendering": {"surfaceId": "main", "root": "root"}}

Tokens may split the delimiter or a JSONL line anywhere. Malformed input is
logged and dropped; nothing here is fatal to the session.
"""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, AsyncIterable, Callable, Iterable, Mapping

from ..actions import UserAction, build_user_action
from ..catalog import get_component_type
from ..config import StreamConfig
from ..protocol import pointer
from ..protocol.error_codes import ErrorCode
from ..protocol.values import resolve_bound_value
from .dispatcher import MessageDispatcher
from .line_buffer import LineReassembler
from .surface import Surface, SurfaceEvent, SurfaceRegistryView, SurfaceView

logger = logging.getLogger(__name__)

SurfaceListener = Callable[[SurfaceEvent], None]

# Event kind emitted for edits made through write_data_path
DATA_WRITE_EVENT = "dataWrite"


class StreamMode(str, Enum):
    TEXT = "TEXT"
    STRUCTURED = "STRUCTURED"


class IngestionEngine:
    """
    Session-scoped owner of text history and the surface registry.

    Usage::

        engine = IngestionEngine()
        for token in agent_stream:
            engine.consume(token)
        engine.flush()

        engine.text_history           # ("Here is your dashboard.",)
        engine.surfaces["main"].root  # "root"

    Collaborators read state through the read-only properties and write
    back only through ``write_data_path``.
    """

    def __init__(
        self,
        config: StreamConfig | None = None,
        dispatcher: MessageDispatcher | None = None,
    ) -> None:
        self.config = config or StreamConfig.default()
        self._dispatcher = dispatcher or MessageDispatcher()
        self._lines = LineReassembler(self.config.line_separator)
        self._mode = StreamMode.TEXT
        self._text_buffer = ""
        self._text_history: list[str] = []
        self._surfaces: dict[str, Surface] = {}
        self._listeners: list[SurfaceListener] = []

    # ------------------------------------------------------------------
    # Read surface for collaborators
    # ------------------------------------------------------------------

    @property
    def mode(self) -> StreamMode:
        return self._mode

    @property
    def text_buffer(self) -> str:
        """Text received since the last archived block."""
        return self._text_buffer

    @property
    def text_history(self) -> tuple[str, ...]:
        """Completed text blocks, oldest first."""
        return tuple(self._text_history)

    @property
    def pending_line(self) -> str:
        """Unterminated JSONL line waiting for more tokens."""
        return self._lines.pending

    @property
    def surfaces(self) -> Mapping[str, SurfaceView]:
        """Read-only view of the surface registry."""
        return SurfaceRegistryView(self._surfaces)

    def get_surface(self, surface_id: str) -> SurfaceView | None:
        surface = self._surfaces.get(surface_id)
        return SurfaceView(surface) if surface is not None else None

    def resolve(self, surface_id: str, value: Any) -> Any:
        """Resolve a bound value against a surface's current data model."""
        surface = self._surfaces.get(surface_id)
        data = surface.data if surface is not None else None
        return resolve_bound_value(value, data)

    def build_action(self, surface_id: str, component_id: str) -> UserAction | None:
        """
        Build the user action event for a component on a surface.

        Returns:
            UserAction, or None if the surface, component or action is missing
        """
        surface = self._surfaces.get(surface_id)
        if surface is None:
            return None
        definition = surface.components.get(component_id)
        component_type = get_component_type(definition)
        if component_type is None:
            return None
        props = definition[component_type]
        if not isinstance(props, dict):
            return None
        return build_user_action(props.get("action"), surface_id, component_id, surface.data)

    # ------------------------------------------------------------------
    # Token ingestion
    # ------------------------------------------------------------------

    def consume(self, token: str) -> None:
        """Process one token from the agent stream."""
        if self._mode is StreamMode.STRUCTURED:
            self._consume_structured(token)
            return

        self._text_buffer += token
        delimiter = self.config.delimiter
        if delimiter not in self._text_buffer:
            return

        before, after = self._text_buffer.split(delimiter, 1)
        if before:
            self._text_history.append(before)
        self._text_buffer = ""
        self._mode = StreamMode.STRUCTURED
        logger.debug("[A2UI] Delimiter found, switching to structured mode")

        if after:
            self._consume_structured(after)

    def consume_all(self, tokens: Iterable[str]) -> None:
        """Consume every token, then flush."""
        for token in tokens:
            self.consume(token)
        self.flush()

    async def consume_stream(self, source: AsyncIterable[str]) -> None:
        """
        Consume tokens from an async source until it is exhausted, then flush.

        Each token is processed synchronously; the only await is on the source.
        """
        async for token in source:
            self.consume(token)
        self.flush()

    def flush(self) -> None:
        """
        Handle end of stream.

        In structured mode a final line without a trailing newline is
        processed; in text mode pending text is archived as a block.
        """
        if self._mode is StreamMode.STRUCTURED:
            tail = self._lines.flush()
            if tail.strip():
                self._handle_line(tail)
        elif self._text_buffer:
            self._text_history.append(self._text_buffer)
            self._text_buffer = ""

    def _consume_structured(self, chunk: str) -> None:
        for line in self._lines.feed(chunk):
            if not line.strip():
                continue
            self._handle_line(line)

    def _handle_line(self, line: str) -> None:
        try:
            message = json.loads(line)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.error(f"[A2UI] Parse error ({ErrorCode.INVALID_JSON.value}): {e} Line: {line[:200]!r}")
            return

        event = self._dispatcher.apply(message, self._surfaces)
        if event is not None:
            self._notify(event)

    # ------------------------------------------------------------------
    # Two-way binding
    # ------------------------------------------------------------------

    def write_data_path(self, surface_id: str, path: str, value: Any) -> bool:
        """
        Write a value into a surface's data model (e.g. from an input control).

        Args:
            surface_id: Target surface
            path: JSON Pointer into the surface data model
            value: New value

        Returns:
            True if the value was written
        """
        surface = self._surfaces.get(surface_id)
        if surface is None:
            logger.warning(f"[A2UI] Data write to unknown surface {surface_id!r} ignored")
            return False
        if not pointer.assign(path, value, surface.data):
            return False

        self._notify(SurfaceEvent(kind=DATA_WRITE_EVENT, surface_id=surface_id, path=path))
        return True

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: SurfaceListener) -> Callable[[], None]:
        """
        Register a listener called after every applied change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: SurfaceEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"[A2UI] Surface listener failed on {event.kind}: {e}", exc_info=True)


__all__ = [
    "DATA_WRITE_EVENT",
    "IngestionEngine",
    "StreamMode",
    "SurfaceListener",
]
