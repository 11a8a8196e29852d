"""
User actions - client-to-agent events fired by interactive components.

A component's ``action`` definition names the action and lists context
entries whose values are bound values:

    {"name": "submit", "context": [{"key": "email", "value": {"path": "/form/email"}}]}

At fire time every context value is resolved against the surface data model
and the result is sent back to the agent as a ``userAction`` event.
"""
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Mapping

from pydantic import BaseModel, Field

from .protocol.values import resolve_bound_value

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserAction(BaseModel):
    """Outbound user action event"""
    name: str
    sourceComponentId: str
    surfaceId: str
    timestamp: str = Field(default_factory=_utc_timestamp)
    context: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return {"userAction": self.model_dump()}


def resolve_action_context(context: Any, data_model: Any) -> dict[str, Any]:
    """Resolve ``[{key, value}]`` context entries against the data model."""
    resolved: dict[str, Any] = {}
    if not context:
        return resolved
    if not isinstance(context, list):
        logger.warning(f"[A2UI] Action context must be a list, got {type(context).__name__}")
        return resolved

    for item in context:
        if not isinstance(item, Mapping) or not isinstance(item.get("key"), str):
            logger.warning(f"[A2UI] Skipping malformed action context entry: {item!r}")
            continue
        resolved[item["key"]] = resolve_bound_value(item.get("value"), data_model)
    return resolved


def build_user_action(
    action: Mapping[str, Any] | None,
    surface_id: str,
    component_id: str,
    data_model: Any,
) -> UserAction | None:
    """
    Build the event for a fired component action.

    Args:
        action: The component's action definition
        surface_id: Surface the component belongs to
        component_id: Component that fired
        data_model: Current data model of the surface

    Returns:
        UserAction, or None if the component has no usable action
    """
    if not action:
        return None
    name = action.get("name")
    if not isinstance(name, str) or not name:
        logger.warning(f"[A2UI] Component {component_id} action has no name")
        return None

    return UserAction(
        name=name,
        sourceComponentId=component_id,
        surfaceId=surface_id,
        context=resolve_action_context(action.get("context"), data_model),
    )


__all__ = [
    "UserAction",
    "build_user_action",
    "resolve_action_context",
]
