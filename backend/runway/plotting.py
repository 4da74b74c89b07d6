"""Plotly capacity-vs-span charts for the HTML calculation report."""

from __future__ import annotations

import plotly.graph_objects as go

from .catalog import BeamCatalog
from .designer import AnalysisResult

_COLORS = ["#2563eb", "#16a34a", "#9333ea", "#ea580c", "#0891b2"]


def capacity_figure(result: AnalysisResult, catalog: BeamCatalog) -> go.Figure:
    """Tabulated capacity curve of every candidate with the ECL and span marked."""
    table = catalog.capacities(result.capped)

    fig = go.Figure()
    for i, candidate in enumerate(result.candidates):
        spans = table.spans_for(candidate.designation)
        fig.add_trace(
            go.Scatter(
                x=list(spans),
                y=[table.get(candidate.designation, s) for s in spans],
                mode="lines+markers",
                name=f"{candidate.rank}. {candidate.designation}",
                line={"width": 3 if candidate.rank == 1 else 1.5, "color": _COLORS[i % len(_COLORS)]},
            )
        )

    fig.add_hline(
        y=result.ecl,
        line={"color": "#dc2626", "dash": "dash"},
        annotation_text=f"ECL {result.ecl:,.0f} lbs",
    )
    fig.add_vline(
        x=result.span,
        line={"color": "#64748b", "dash": "dot"},
        annotation_text=f"span {result.span:g} ft",
    )

    system = "Capped" if result.capped else "Uncapped"
    fig.update_layout(
        title=f"{system} Beam Capacity vs Span",
        template="plotly_white",
        xaxis_title="Span (ft)",
        yaxis_title="Allowable ECL (lbs)",
        legend_title="Candidate",
        margin={"t": 70, "r": 30, "b": 60, "l": 70},
    )
    return fig


def capacity_chart_html(result: AnalysisResult, catalog: BeamCatalog) -> str:
    """HTML fragment for embedding; plotly.js is pulled from the CDN."""
    return capacity_figure(result, catalog).to_html(full_html=False, include_plotlyjs="cdn")
