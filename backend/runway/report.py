"""Generate an HTML calculation report from a runway beam analysis."""

from __future__ import annotations

from pathlib import Path

import jinja2

from .catalog import BeamCatalog, default_catalog
from .config import BeamConfiguration
from .designer import AnalysisResult
from .plotting import capacity_chart_html

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_CHECK_LABELS = {
    "lateral_deflection": "Lateral deflection (L/450)",
    "longitudinal_deflection": "Longitudinal deflection (L/500)",
    "bending_stress": "Column bending stress",
    "axial_unity": "Axial unity (fa/Fa + fe/Fe)",
}


def _make_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _template_vars(result: AnalysisResult, config: BeamConfiguration) -> dict:
    """Flat dict of pre-formatted values for the template."""
    fmt0 = lambda v: f"{v:,.0f}"
    fmt2 = lambda v: f"{v:,.2f}"
    fmt3 = lambda v: f"{v:.3f}"
    fmt4 = lambda v: f"{v:.4f}"

    beam = result.selected_beam
    governing = result.governing_check

    return dict(
        # Inputs
        rated_capacity=fmt0(config.rated_capacity),
        hoist_trolley_weight=fmt0(config.hoist_trolley_weight),
        girder_weight=fmt0(config.girder_weight),
        panel_weight=fmt0(config.panel_weight),
        end_truck_weight=fmt0(config.end_truck_weight),
        total_beam_weight=fmt0(config.total_beam_weight),
        num_columns=config.num_columns,
        rail_height=f"{config.rail_height:g}",
        wheelbase=f"{config.wheelbase:g}",
        support_centers=f"{config.support_centers:g}",
        bridge_span=f"{config.bridge_span:g}",
        column_type="Freestanding" if config.freestanding else "Braced",
        system="Capped" if config.capped else "Uncapped",
        hoist_speed=f"{config.hoist_speed:g} ft/min" if config.hoist_speed > 0 else "Default",

        # Load distribution
        ratio=fmt4(result.wheelbase_span_ratio),
        k1=fmt3(result.k1),
        k2=fmt3(result.k2),
        impact_factor=fmt3(result.impact_factor),
        max_wheel_load=fmt0(result.max_wheel_load),
        ecl=fmt0(result.ecl),

        # Beam selection
        designation=beam.designation,
        beam_weight=f"{beam.weight:g}",
        beam_depth=f"{beam.depth:g}",
        Ix=f"{beam.Ix:g}",
        Sx=f"{beam.Sx:g}",
        candidates=[
            dict(
                rank=c.rank,
                designation=c.designation,
                weight=f"{c.weight:g}",
                capacity=fmt0(c.capacity),
                utilisation=f"{c.utilisation:.1f}",
                margin=fmt0(c.margin),
                selected=c.rank == 1,
            )
            for c in result.candidates
        ],

        # Loads and moments
        runway_beam_weight=fmt0(result.runway_beam_weight),
        lateral_load=fmt0(result.lateral_load),
        longitudinal_load=fmt0(result.longitudinal_load),
        column_moment=fmt0(result.column_moment),
        foundation_moment=fmt0(result.foundation_moment),
        lateral_otm=fmt2(result.lateral_otm),
        longitudinal_otm=fmt2(result.longitudinal_otm),
        max_vertical_load=fmt0(result.max_vertical_load),
        column_load_foundation=fmt2(result.column_load_foundation),
        effective_length=f"{config.effective_length:g}",
        rail_height_in=f"{config.rail_height_in:g}",

        # Checks
        checks=[
            dict(
                label=_CHECK_LABELS.get(c.name, c.name),
                demand=fmt4(c.demand),
                limit=fmt4(c.limit),
                units=c.units,
                utilisation=fmt3(c.utilisation),
                ok=c.ok,
            )
            for c in result.checks
        ],
        governing=_CHECK_LABELS.get(governing.name, governing.name),
        overall_ok=result.overall_pass,
    )


def render_report(
    result: AnalysisResult,
    config: BeamConfiguration,
    catalog: BeamCatalog | None = None,
    *,
    project_title: str = "",
    job_no: str = "",
    calcs_by: str = "",
    include_chart: bool = True,
) -> str:
    """Render the calculation report to an HTML string."""
    template = _make_env().get_template("analysis_report.html.j2")

    tvars = _template_vars(result, config)
    tvars.update(
        project_title=project_title,
        job_no=job_no,
        calcs_by=calcs_by,
        chart_html=(
            capacity_chart_html(result, catalog or default_catalog()) if include_chart else ""
        ),
    )
    return template.render(**tvars)


def generate_report(
    result: AnalysisResult,
    config: BeamConfiguration,
    output_path: str | Path,
    catalog: BeamCatalog | None = None,
    **kwargs,
) -> Path:
    """Write the HTML report to ``output_path`` and return its absolute path.

    Extra keyword arguments are passed to :func:`render_report`.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report(result, config, catalog, **kwargs), encoding="utf-8")
    return output_path.resolve()
