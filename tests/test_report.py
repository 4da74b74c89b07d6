import pytest

from runway.plotting import capacity_figure
from runway.report import generate_report, render_report


@pytest.fixture
def reference_result(designer, reference_config):
    return designer.analyze(reference_config)


class TestCapacityFigure:
    def test_one_trace_per_candidate(self, reference_result, catalog):
        fig = capacity_figure(reference_result, catalog)
        assert len(fig.data) == len(reference_result.candidates)
        assert fig.data[0].name == "1. W33x118+C15x33.9"

    def test_trace_follows_table(self, reference_result, catalog):
        fig = capacity_figure(reference_result, catalog)
        spans = list(fig.data[0].x)
        assert 44 in spans
        assert list(fig.data[0].y)[spans.index(44)] == 15_357


class TestHtmlReport:
    def test_render_contents(self, reference_result, reference_config, catalog):
        html = render_report(
            reference_result, reference_config, catalog, project_title="Bay 3 Runway", include_chart=False
        )
        assert "Bay 3 Runway" in html
        assert "W33x118+C15x33.9" in html
        assert "13,786" in html
        assert "FAIL" in html
        assert "Axial unity" in html

    def test_title_is_plain_ascii(self, reference_result, reference_config, catalog):
        html = render_report(
            reference_result, reference_config, catalog, project_title="Bay 3 Runway", include_chart=False
        )
        assert "<title>Runway Beam Calculation: Bay 3 Runway</title>" in html

    def test_chart_embedded(self, reference_result, reference_config, catalog):
        html = render_report(reference_result, reference_config, catalog)
        assert "plotly" in html.lower()

    def test_user_text_escaped(self, reference_result, reference_config, catalog):
        html = render_report(
            reference_result, reference_config, catalog, project_title="<script>x</script>", include_chart=False
        )
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html

    def test_generate_writes_file(self, tmp_path, light_config, designer):
        result = designer.analyze(light_config)
        path = generate_report(result, light_config, tmp_path / "out" / "report.html", include_chart=False)
        assert path.exists()
        text = path.read_text(encoding="utf-8")
        assert "W10x22" in text
        assert "PASS" in text
