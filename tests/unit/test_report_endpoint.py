import functools

from fastapi.testclient import TestClient

from application import render_report
from domain.report import TaxonomyReport
from domain.taxonomy import TaxonomyStore
from infrastructure.http import create_app
from infrastructure.rendering import HtmlReportRenderer, ReportRenderError


def _client(store: TaxonomyStore, renderer: HtmlReportRenderer | None = None) -> TestClient:
    app = create_app(functools.partial(render_report, store, renderer or HtmlReportRenderer()))
    return TestClient(app)


def test_get_messages_returns_html_report() -> None:
    store = TaxonomyStore()
    store.ingest("a", "x")
    store.ingest("b", "y.z")

    resp = _client(store).get("/messages")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Total Number of Metrics: 2" in resp.text
    assert "<td>a</td>" in resp.text


def test_report_reflects_later_ingestion() -> None:
    store = TaxonomyStore()
    client = _client(store)
    assert "Total Number of Metrics: 0" in client.get("/messages").text

    store.ingest("r", "foo.bar")
    store.ingest("r", "foo.baz")
    assert "Total Number of Metrics: 2" in client.get("/messages").text


class _BrokenRenderer(HtmlReportRenderer):
    def render(self, report: TaxonomyReport) -> str:
        raise ReportRenderError("boom")


def test_render_failure_is_a_500_and_store_survives() -> None:
    store = TaxonomyStore()
    store.ingest("r", "foo")
    client = _client(store, _BrokenRenderer())

    resp = client.get("/messages")

    assert resp.status_code == 500
    assert "Report rendering failed" in resp.text
    # Process and store are untouched; a healthy renderer still works
    assert store.stats().events_ingested == 1
    assert _client(store).get("/messages").status_code == 200


def test_only_the_report_route_is_exposed() -> None:
    client = _client(TaxonomyStore())
    assert client.get("/docs").status_code == 404
    assert client.post("/messages").status_code == 405
