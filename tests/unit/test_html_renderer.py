from pathlib import Path

import pytest

from domain.report import build_report
from domain.taxonomy import TaxonomyStore
from infrastructure.rendering import HtmlReportRenderer, ReportRenderError


def _report(*events: tuple[str, str]):
    store = TaxonomyStore()
    for origin, name in events:
        store.ingest(origin, name)
    return build_report(store.snapshot())


def test_renders_heading_total_and_header() -> None:
    html = HtmlReportRenderer().render(_report(("a", "x"), ("b", "y.z")))

    assert "<h1>Loggregator Metrics</h1>" in html
    assert "Total Number of Metrics: 2" in html
    assert "<tr><th>Origin</th><th>Category</th><th>Sub Category</th></tr>" in html


def test_rowspan_only_for_origins_with_several_categories() -> None:
    html = HtmlReportRenderer().render(_report(("multi", "a"), ("multi", "b"), ("single", "c")))

    assert "<td rowspan=2>multi</td>" in html
    assert "<td>single</td>" in html
    assert "rowspan=1" not in html


def test_category_only_cells_drop_the_inner_border() -> None:
    html = HtmlReportRenderer().render(_report(("r", "uptime")))

    assert '<td style="border-right:none">uptime</td>' in html
    assert '<td style="border-left:none"></td>' in html


def test_subcategories_render_as_nested_tables() -> None:
    html = HtmlReportRenderer().render(_report(("r", "foo.bar"), ("r", "foo.baz.qux")))

    assert "<tr><td>bar</td></tr>" in html
    assert "<tr><td>baz<table border=0><tr><td>qux</td></tr></table></td></tr>" in html


def test_names_are_escaped() -> None:
    html = HtmlReportRenderer().render(_report(("<script>", "a&b.<i>")))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b" in html


def test_missing_template_raises_render_error(tmp_path: Path) -> None:
    renderer = HtmlReportRenderer(templates_root=tmp_path)
    with pytest.raises(ReportRenderError):
        renderer.render(_report(("a", "x")))


def test_check_fails_fast_on_missing_template(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HtmlReportRenderer(templates_root=tmp_path).check()
