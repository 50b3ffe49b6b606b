"""Tests for header value transforms and id helpers."""

import string

import pytest

from b3propagation.context import IDENTITY, URL_ESCAPING, url_query_escape, url_query_unescape
from b3propagation.errors import ValidationError
from b3propagation.tracer.span_context import MAX_ID, SpanContext
from b3propagation.utils.helpers import format_id, parse_id


class TestUrlEscaping:
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "abc",
            "hello world",
            "a+b=c&d",
            "100%",
            "%2B",
            string.printable,
            "ünïcødé",
        ],
    )
    def test_decode_reverses_encode(self, value):
        assert URL_ESCAPING.decode(URL_ESCAPING.encode(value)) == value

    def test_encode_matches_query_escaping(self):
        assert url_query_escape("a b") == "a+b"
        assert url_query_escape("a/b?c") == "a%2Fb%3Fc"
        assert url_query_escape("AZaz09-_.~") == "AZaz09-_.~"

    def test_decode_plus_is_space(self):
        assert url_query_unescape("a+b%20c") == "a b c"

    @pytest.mark.parametrize("value", ["%", "%z1", "abc%4", "%%41"])
    def test_malformed_escape_returns_input(self, value):
        assert url_query_unescape(value) == value

    def test_non_utf8_escape_returns_input(self):
        assert url_query_unescape("%ff%fe") == "%ff%fe"

    def test_identity_is_verbatim(self):
        value = "a b%20+c"
        assert IDENTITY.encode(value) == value
        assert IDENTITY.decode(value) == value


class TestIdHelpers:
    @pytest.mark.parametrize("value, expected", [(0, "0"), (1, "1"), (255, "ff"), (MAX_ID, "ffffffffffffffff")])
    def test_format_id(self, value, expected):
        assert format_id(value) == expected

    def test_format_id_does_not_pad(self):
        assert format_id(0x00F0) == "f0"

    @pytest.mark.parametrize("value, expected", [("0", 0), ("FF", 255), ("00000000000000ff", 255), ("ffffffffffffffff", MAX_ID)])
    def test_parse_id(self, value, expected):
        assert parse_id(value) == expected

    @pytest.mark.parametrize("value", ["", "g", "0x1", "-1", "+1", " 1", "1 ", "1_0", "1ffffffffffffffff"])
    def test_parse_id_rejects(self, value):
        with pytest.raises(ValueError):
            parse_id(value)


class TestSpanContext:
    def test_defaults(self):
        ctx = SpanContext(trace_id=1, span_id=2)
        assert ctx.parent_id == 0
        assert ctx.sampled is False
        assert ctx.is_valid()
        assert ctx.is_root()

    def test_zero_trace_id_is_invalid(self):
        assert not SpanContext(trace_id=0, span_id=1).is_valid()

    def test_value_equality(self):
        assert SpanContext(1, 2, 3, True) == SpanContext(trace_id=1, span_id=2, parent_id=3, sampled=True)

    def test_immutable(self):
        ctx = SpanContext(trace_id=1, span_id=2)
        with pytest.raises(AttributeError):
            ctx.trace_id = 3

    @pytest.mark.parametrize("kwargs", [{"trace_id": -1}, {"span_id": MAX_ID + 1}, {"parent_id": "1"}])
    def test_rejects_out_of_range_ids(self, kwargs):
        values = {"trace_id": 1, "span_id": 2}
        values.update(kwargs)
        with pytest.raises(ValidationError):
            SpanContext(**values)
