"""
Pytest configuration for a2ui-stream tests

Shared fixtures for building agent streams
"""
import json

import pytest

from a2ui_stream.config import DEFAULT_DELIMITER
from a2ui_stream.stream.engine import IngestionEngine


def jsonl(*messages: dict) -> str:
    """Serialize messages as a newline-terminated JSONL body"""
    return "".join(json.dumps(m) + "\n" for m in messages)


@pytest.fixture
def engine():
    """Fresh ingestion engine with default config"""
    return IngestionEngine()


@pytest.fixture
def dashboard_stream():
    """A complete agent reply: preamble, delimiter, and a small surface"""
    body = jsonl(
        {"surfaceUpdate": {"surfaceId": "main", "components": [
            {"id": "root", "component": {"Column": {"children": {"explicitList": ["title", "save"]}}}},
            {"id": "title", "component": {"Text": {"text": {"path": "/user/name"}}}},
            {"id": "save", "component": {"Button": {
                "label": {"literalString": "Save"},
                "action": {"name": "save", "context": [
                    {"key": "name", "value": {"path": "/user/name"}},
                    {"key": "draft", "value": {"literalBool": False}},
                ]},
            }}},
        ]}},
        {"dataModelUpdate": {"surfaceId": "main", "contents": [
            {"key": "user", "valueMap": [{"key": "name", "valueString": "Ada"}]},
        ]}},
        {"beginRendering": {"surfaceId": "main", "root": "root"}},
    )
    return "Here is your dashboard." + DEFAULT_DELIMITER + body
