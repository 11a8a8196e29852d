"""
A2UI standard component catalog (v0.8).

Component definitions are stored opaquely by the stream layer; a definition
is a single-key object naming its type, e.g. ``{"Text": {"text": {...}}}``.
"""
from __future__ import annotations

from typing import Any, Mapping

CATALOG_ID = "https://a2ui.org/specification/v0_8/standard_catalog_definition.json"

# Component type names grouped by category
LAYOUT_COMPONENTS = ("Column", "Row", "Card", "List")
DISPLAY_COMPONENTS = ("Text", "Icon", "Metric")
INTERACTIVE_COMPONENTS = ("Button",)
VISUALIZATION_COMPONENTS = ("Chart", "ProgressBar")

SUPPORTED_COMPONENTS = frozenset(
    LAYOUT_COMPONENTS + DISPLAY_COMPONENTS + INTERACTIVE_COMPONENTS + VISUALIZATION_COMPONENTS
)

# Fallback type for unknown components
ERROR_COMPONENT = "Error"


def is_component_supported(component_type: str) -> bool:
    return component_type in SUPPORTED_COMPONENTS


def get_supported_components() -> list[str]:
    return sorted(SUPPORTED_COMPONENTS)


def get_component_type(definition: Any) -> str | None:
    """Type name of a component definition, or None if it is not single-key."""
    if not isinstance(definition, Mapping) or len(definition) != 1:
        return None
    return next(iter(definition))


def resolve_component_type(definition: Any) -> str:
    """Catalog type to render for a definition, falling back to ``Error``."""
    component_type = get_component_type(definition)
    if component_type is None or not is_component_supported(component_type):
        return ERROR_COMPONENT
    return component_type


__all__ = [
    "CATALOG_ID",
    "ERROR_COMPONENT",
    "SUPPORTED_COMPONENTS",
    "get_component_type",
    "get_supported_components",
    "is_component_supported",
    "resolve_component_type",
]
