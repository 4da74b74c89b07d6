"""Demo: 5-ton top-running crane: beam selection, checks + HTML report."""

from runway import BeamConfiguration, RunwayDesigner, SelectionError, generate_report


def main():
    # ── Configuration ─────────────────────────────────────────────
    config = BeamConfiguration.create(
        rated_capacity=10_000,       # lbs
        hoist_trolley_weight=1_700,  # lbs
        girder_weight=3_000,         # lbs
        panel_weight=2_000,          # lbs
        end_truck_weight=1_000,      # lbs
        num_columns=2,
        rail_height=20,              # ft
        wheelbase=7,                 # ft
        support_centers=45,          # ft
        bridge_span=44,              # ft
        freestanding=False,
        capped=True,
    )
    print(config.summary())

    # ── Analysis ──────────────────────────────────────────────────
    designer = RunwayDesigner()
    try:
        result = designer.analyze(config)
    except SelectionError as e:
        print(f"  {e}")
        for beam in designer.find_alternatives(config):
            print(f"  Alternative: {beam.designation} ({beam.weight:g} lbs/ft)")
        return
    result.print_summary()

    # ── HTML Report ───────────────────────────────────────────────
    path = generate_report(
        result,
        config,
        "output/runway_beam_report.html",
        designer.catalog,
        project_title="Example Project",
        job_no="J-2024-001",
        calcs_by="DM",
    )
    print(f"  Saved: {path}")


if __name__ == "__main__":
    main()
