import httpx
import pytest
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind

from cartelera.core.telemetry import setup_telemetry
from cartelera.main import create_app

from conftest import make_settings


@pytest.mark.asyncio
async def test_requests_and_queries_are_traced(store_url):
    settings = make_settings(store_url, service_name="cartelera-test")
    app = create_app(settings)
    exporter = InMemorySpanExporter()
    provider = setup_telemetry(app, settings, app.state.database, exporter=exporter)

    try:
        async with app.state.database.engine.begin() as conn:
            await conn.run_sync(app.state.database.listings.create)

        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                assert (await client.get("/api/listings")).status_code == 200

        provider.force_flush()
        spans = exporter.get_finished_spans()

        assert any(s.kind == SpanKind.SERVER and "/api/listings" in s.name for s in spans)
        # SQL spans are client spans
        assert any(s.kind == SpanKind.CLIENT for s in spans)
        assert all(s.resource.attributes["service.name"] == "cartelera-test" for s in spans)
    finally:
        FastAPIInstrumentor.uninstrument_app(app)
        SQLAlchemyInstrumentor().uninstrument()
        provider.shutdown()
