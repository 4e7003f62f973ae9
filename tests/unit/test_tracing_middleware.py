"""
Unit tests for the request tracing middleware.

Spans are captured with the OpenTelemetry SDK in-memory exporter through a
tracer provider injected into the application, leaving the global provider
untouched.
"""

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind, StatusCode

from api.src.main import create_app


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def traced_client(settings, fake_provider, exporter):
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
    app = create_app(settings=settings, provider=fake_provider, tracer_provider=tracer_provider)
    return TestClient(app)


def request_spans(exporter):
    return [span for span in exporter.get_finished_spans() if span.name == "request"]


class TestRequestSpan:
    """Test the per-request span."""

    def test_palette_request_span(self, traced_client, exporter):
        response = traced_client.get("/getPalette", params={"base_color": "FF0000", "theme_type": "Light"})

        assert response.status_code == 200
        (span,) = request_spans(exporter)
        assert span.kind == SpanKind.SERVER
        assert span.attributes["http.method"] == "GET"
        assert span.attributes["http.route"] == "/getPalette"
        assert span.attributes["http.url"].endswith("/getPalette?base_color=FF0000&theme_type=Light")
        assert span.attributes["http.status_code"] == 200

    def test_span_recorded_for_failed_request(self, traced_client, exporter):
        response = traced_client.get("/getPalette", params={"base_color": "zzzzzz"})

        assert response.status_code == 500
        (span,) = request_spans(exporter)
        assert span.attributes["http.route"] == "/getPalette"
        assert span.attributes["http.status_code"] == 500
        assert span.status.status_code == StatusCode.ERROR

    def test_greeting_route(self, traced_client, exporter):
        traced_client.get("/", params={"anything": "ignored"})

        (span,) = request_spans(exporter)
        assert span.attributes["http.route"] == "/"

    def test_unknown_path_has_no_route(self, traced_client, exporter):
        response = traced_client.get("/does-not-exist")

        assert response.status_code == 404
        (span,) = request_spans(exporter)
        assert "http.route" not in span.attributes
        assert span.attributes["http.status_code"] == 404

    def test_wrong_method_is_traced(self, traced_client, exporter):
        response = traced_client.post("/getPalette")

        assert response.status_code == 405
        (span,) = request_spans(exporter)
        assert span.attributes["http.method"] == "POST"
        assert span.attributes["http.status_code"] == 405

    def test_unexpected_failure_is_recorded(self, settings, fake_provider, exporter):
        tracer_provider = TracerProvider()
        tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
        app = create_app(settings=settings, provider=fake_provider, tracer_provider=tracer_provider)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/getPalette", params={"base_color": "0bad00"})

        assert response.status_code == 500
        assert response.text == "Something went wrong: fake provider crashed"
        (span,) = request_spans(exporter)
        assert span.attributes["http.route"] == "/getPalette"
        assert span.attributes["http.status_code"] == 500
        assert span.status.status_code == StatusCode.ERROR
        assert app.state.metrics.registry.get_sample_value(
            "http_requests_total", {"method": "GET", "route": "/getPalette", "status": "500"}
        ) == 1.0


class TestRequestMetrics:
    """Test per-route request counting."""

    def test_counts_by_route_and_status(self, client):
        client.get("/getPalette", params={"base_color": "FF0000"})
        client.get("/getPalette", params={"base_color": "nope"})
        client.get("/missing")

        registry = client.app.state.metrics.registry
        assert registry.get_sample_value(
            "http_requests_total", {"method": "GET", "route": "/getPalette", "status": "200"}
        ) == 1.0
        assert registry.get_sample_value(
            "http_requests_total", {"method": "GET", "route": "/getPalette", "status": "500"}
        ) == 1.0
        assert registry.get_sample_value(
            "http_requests_total", {"method": "GET", "route": "unmatched", "status": "404"}
        ) == 1.0
