"""Tests for the HTTP client and server helpers."""

import logging
import unittest

from b3propagation.instrumentation import extract_parent_context, inject_http_headers
from b3propagation.tracer.span_context import SpanContext


class TestHttpHelpers(unittest.TestCase):

    def test_inject_returns_same_mapping(self):
        headers = {"accept": "application/json"}
        result = inject_http_headers(headers, SpanContext(trace_id=0x10, span_id=0x20, parent_id=0x30, sampled=True))

        self.assertIs(result, headers)
        self.assertEqual(headers["accept"], "application/json")
        self.assertEqual(headers["x-b3-traceid"], "10")
        self.assertEqual(headers["x-b3-spanid"], "20")
        self.assertEqual(headers["x-b3-parentspanid"], "30")
        self.assertEqual(headers["x-b3-sampled"], "1")

    def test_client_to_server_round_trip(self):
        ctx = SpanContext(trace_id=0xDEADBEEF, span_id=0x1, parent_id=0x2, sampled=False)
        headers = inject_http_headers({}, ctx)

        self.assertEqual(extract_parent_context(headers), ctx)

    def test_inject_clears_stale_sampled_header(self):
        headers = {"X-B3-Sampled": "1", "x-b3-traceid": "99", "accept": "*/*"}

        inject_http_headers(headers, SpanContext(trace_id=0x10, span_id=0x20, sampled=False))

        self.assertNotIn("X-B3-Sampled", headers)
        self.assertNotIn("x-b3-sampled", headers)
        self.assertEqual(headers["x-b3-traceid"], "10")
        self.assertEqual(headers["accept"], "*/*")
        self.assertFalse(extract_parent_context(headers).sampled)

    def test_missing_context_starts_root(self):
        self.assertIsNone(extract_parent_context({"Host": "example.com"}))

    def test_malformed_context_logs_warning(self):
        with self.assertLogs("b3propagation.instrumentation.http_server", level=logging.WARNING) as logs:
            result = extract_parent_context({"X-B3-TraceId": "not-hex"})

        self.assertIsNone(result)
        self.assertTrue(any("X-B3-TraceId" in message for message in logs.output))


if __name__ == "__main__":
    unittest.main()
