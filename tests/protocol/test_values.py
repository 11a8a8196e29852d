"""
Tests for the A2UI value codec (protocol values and bound values).
"""
import pytest

from a2ui_stream.protocol.values import (
    MISSING,
    BoundTag,
    ValueTag,
    decode_protocol_value,
    detect_bound_tag,
    detect_value_tag,
    encode_data_contents,
    encode_protocol_value,
    resolve_bound_value,
)


class TestDecodeProtocolValue:
    """Decoding tagged protocol values"""

    def test_scalars(self):
        assert decode_protocol_value({"valueString": "Ada"}) == "Ada"
        assert decode_protocol_value({"valueNumber": 3.5}) == 3.5
        assert decode_protocol_value({"valueBool": True}) is True
        assert decode_protocol_value({"valueNull": True}) is None

    def test_falsy_values_are_preserved(self):
        """Tag presence, not truthiness, decides the value"""
        assert decode_protocol_value({"key": "n", "valueNumber": 0}) == 0
        assert decode_protocol_value({"key": "b", "valueBool": False}) is False
        assert decode_protocol_value({"key": "s", "valueString": ""}) == ""

    def test_no_tag_is_missing(self):
        """Absence of a tag is distinct from null"""
        result = decode_protocol_value({"key": "x"})
        assert result is MISSING
        assert result is not None

    def test_non_mapping_is_missing(self):
        assert decode_protocol_value("Ada") is MISSING

    def test_nested_map(self):
        entry = {
            "key": "user",
            "valueMap": [
                {"key": "name", "valueString": "Ada"},
                {"key": "tags", "valueList": [{"valueString": "math"}, {"valueNumber": 1843}]},
                {"key": "address", "valueMap": [{"key": "city", "valueString": "London"}]},
            ],
        }

        assert decode_protocol_value(entry) == {
            "name": "Ada",
            "tags": ["math", 1843],
            "address": {"city": "London"},
        }

    def test_duplicate_map_keys_last_wins(self):
        entry = {"valueMap": [{"key": "a", "valueNumber": 1}, {"key": "a", "valueNumber": 2}]}
        assert decode_protocol_value(entry) == {"a": 2}

    def test_map_entries_without_key_or_value_are_skipped(self):
        entry = {"valueMap": [{"valueString": "orphan"}, {"key": "empty"}, {"key": "ok", "valueBool": False}]}
        assert decode_protocol_value(entry) == {"ok": False}

    def test_list_keeps_positions(self):
        """Untagged list items decode to None so later items keep their index"""
        entry = {"valueList": [{"valueString": "a"}, {}, {"valueString": "c"}]}
        assert decode_protocol_value(entry) == ["a", None, "c"]

    def test_malformed_containers(self):
        assert decode_protocol_value({"valueList": "nope"}) is MISSING
        assert decode_protocol_value({"valueMap": {"a": 1}}) is MISSING

    def test_tag_detection_order(self):
        """With several tags present the first in ValueTag order wins"""
        assert detect_value_tag({"valueNumber": 1, "valueString": "s"}) is ValueTag.STRING
        assert detect_value_tag({"key": "k"}) is None


class TestEncodeProtocolValue:
    """Encoding native values"""

    def test_bool_is_not_a_number(self):
        assert encode_protocol_value(True) == {"valueBool": True}
        assert encode_protocol_value(1) == {"valueNumber": 1}

    def test_nested(self):
        encoded = encode_protocol_value({"name": "Ada", "langs": ["en", None]})

        assert encoded == {
            "valueMap": [
                {"key": "name", "valueString": "Ada"},
                {"key": "langs", "valueList": [{"valueString": "en"}, {"valueNull": True}]},
            ]
        }
        assert decode_protocol_value(encoded) == {"name": "Ada", "langs": ["en", None]}

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            encode_protocol_value(object())

    def test_data_contents(self):
        contents = encode_data_contents({"count": 0, "title": "Hi"})
        assert contents == [
            {"key": "count", "valueNumber": 0},
            {"key": "title", "valueString": "Hi"},
        ]


class TestResolveBoundValue:
    """Resolving bound values against a data model"""

    @pytest.fixture
    def data(self):
        return {"user": {"name": "Ada", "active": False}, "a/b": 1}

    def test_literals(self, data):
        assert resolve_bound_value({"literalString": "Hello"}, data) == "Hello"
        assert resolve_bound_value({"literalNumber": 0}, data) == 0
        assert resolve_bound_value({"literalBool": False}, data) is False
        assert resolve_bound_value({"literalBoolean": True}, data) is True

    def test_path(self, data):
        assert resolve_bound_value({"path": "/user/name"}, data) == "Ada"
        assert resolve_bound_value({"path": "/user/active"}, data) is False
        assert resolve_bound_value({"path": "/a~1b"}, data) == 1
        assert resolve_bound_value({"path": "/user/missing"}, data) is None

    def test_literal_takes_precedence_over_path(self, data):
        value = {"path": "/user/name", "literalString": "fallback"}
        assert resolve_bound_value(value, data) == "fallback"

    def test_precedence_order(self, data):
        value = {"literalBool": True, "literalNumber": 2, "literalString": "s"}
        assert resolve_bound_value(value, data) == "s"
        assert detect_bound_tag({"literalBool": True, "literalNumber": 2}) is BoundTag.LITERAL_NUMBER

    def test_plain_values_pass_through(self, data):
        assert resolve_bound_value("already literal", data) == "already literal"
        assert resolve_bound_value(5, data) == 5
        assert resolve_bound_value(None, data) is None

    def test_untagged_mapping(self, data):
        assert resolve_bound_value({"other": 1}, data) is None

    def test_not_cached(self, data):
        """Resolution reflects the data model at call time"""
        bound = {"path": "/user/name"}
        assert resolve_bound_value(bound, data) == "Ada"

        data["user"]["name"] = "Grace"
        assert resolve_bound_value(bound, data) == "Grace"


class TestUntypedLiteral:
    """The generic ``literal`` tag"""

    def test_literal_resolves(self):
        assert resolve_bound_value({"literal": "x"}, {}) == "x"
        assert resolve_bound_value({"literal": 0}, {}) == 0
        assert detect_bound_tag({"literal": False}) is BoundTag.LITERAL

    def test_typed_literals_take_precedence(self):
        assert resolve_bound_value({"literal": "generic", "literalString": "typed"}, {}) == "typed"
        assert resolve_bound_value({"literal": "generic", "path": "/a"}, {"a": "bound"}) == "generic"

    def test_null_literal_falls_through_to_path(self):
        assert resolve_bound_value({"literal": None, "path": "/a"}, {"a": "bound"}) == "bound"
        assert resolve_bound_value({"literal": None}, {}) is None
