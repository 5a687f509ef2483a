# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for satellite mission analysis.

Usage:
    satdesign analyze -i mission.json -o report.json      # all budgets
    satdesign decay --altitude 400 --ballistic-coefficient 0.0055
    satdesign decay --altitude 550 --ballistic-coefficient 0.01 --export-csv decay.csv
    satdesign constellation --total 24 --planes 6 --phasing 1 --altitude 550 --inclination 53
    satdesign radiation --altitude 550 --inclination 97.6 --shielding 2 --lifetime 3
    satdesign --version
"""
import argparse
import csv
import logging
import sys

from satdesign.adapters.json_io import JsonMissionReader, JsonReportWriter
from satdesign.domain.constellation import WalkerParams, compute_constellation_metrics
from satdesign.domain.lifetime import Deorbited, propagate_decay
from satdesign.domain.mission_analysis import analyze_mission
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalElements
from satdesign.domain.radiation import compute_radiation_environment

logger = logging.getLogger(__name__)


def _run_analyze(args) -> None:
    """Run every budget for a mission file and print a summary."""
    try:
        params = JsonMissionReader().read_mission(args.input)
        analysis = analyze_mission(params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    orbit = analysis.orbit
    print(
        f"Orbit: {orbit.perigee_altitude_km:.1f} x {orbit.apogee_altitude_km:.1f} km, "
        f"period {orbit.period_min:.2f} min, {orbit.revs_per_day:.2f} revs/day"
    )
    print(
        f"Power: margin {analysis.power.power_margin:.1%}, "
        f"DoD {analysis.power.battery_dod:.1%} [{analysis.power.status}]"
    )
    print(
        f"Delta-V: {analysis.delta_v.available_delta_v_ms:.1f} available / "
        f"{analysis.delta_v.required_delta_v_ms:.1f} required m/s [{analysis.delta_v.status}]"
    )
    print(
        f"Link: {analysis.link.link_margin_db:.1f} dB at {analysis.link.elevation_deg:.0f} deg "
        f"[{analysis.link.status}]"
    )
    print(
        f"Radiation: {analysis.radiation.mission_total_krad:.2f} krad mission total "
        f"[{analysis.radiation.status}]"
    )
    thermal = analysis.thermal
    print(
        f"Thermal: hot {thermal.hot_case_c:.1f} C, cold {thermal.cold_case_c:.1f} C "
        f"[{thermal.status}]"
    )
    lifetime = analysis.lifetime
    if lifetime.deorbited:
        print(f"Lifetime: {lifetime.time_days / OrbitalConstants.DAYS_PER_YEAR:.2f} years")
    else:
        print(f"Lifetime: > {lifetime.horizon_years:g} years ({lifetime.reason})")
    if analysis.constellation is not None:
        c = analysis.constellation
        print(f"Constellation: {c.total_satellites} satellites in {c.planes} planes [{c.status}]")
    if analysis.contacts is not None:
        m = analysis.contacts.metrics
        print(f"Contacts: {m.passes_per_day:.1f} passes/day, {m.daily_contact_min:.1f} min/day")
    print(f"Overall status: {analysis.status}")

    if args.output:
        JsonReportWriter().write_report(analysis, args.output)
        print(f"Wrote report to {args.output}")


def _run_decay(args) -> None:
    """Propagate orbital decay from a circular orbit."""
    try:
        elements = OrbitalElements.circular(args.altitude, args.inclination)
        propagation = propagate_decay(
            elements,
            args.ballistic_coefficient,
            horizon_years=args.horizon_years,
            solar_activity=args.solar_activity,
        )
        points = list(propagation)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    outcome = propagation.outcome
    if isinstance(outcome, Deorbited):
        years = outcome.time_days / OrbitalConstants.DAYS_PER_YEAR
        print(f"Deorbited after {outcome.time_days:.1f} days ({years:.2f} years)")
    else:
        print(
            f"Unresolved after {outcome.time_days:.1f} days: {outcome.reason} "
            f"(final altitude {points[-1].altitude_km:.1f} km)"
        )

    if args.export_csv:
        with open(args.export_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["time_days", "altitude_km"])
            for p in points:
                writer.writerow([f"{p.time_days:.6f}", f"{p.altitude_km:.6f}"])
        print(f"Exported {len(points)} points to {args.export_csv}")


def _run_constellation(args) -> None:
    """Summarize a Walker constellation."""
    walker = WalkerParams(
        type=args.type,
        total_sats=args.total,
        planes=args.planes,
        phasing=args.phasing,
        altitude_km=args.altitude,
        inclination_deg=args.inclination,
    )
    try:
        metrics = compute_constellation_metrics(walker, args.unit_mass)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    lo, hi = metrics.coverage_lat_band
    print(f"Walker {args.type} {metrics.total_satellites}/{metrics.planes}/{args.phasing}")
    print(f"  Satellites per plane: {', '.join(str(n) for n in metrics.plane_populations)}")
    print(f"  Total mass: {metrics.total_mass_kg:.1f} kg")
    print(f"  Orbital period: {metrics.orbital_period_min:.2f} min")
    print(f"  Coverage band: {lo:.1f} to {hi:.1f} deg latitude")
    print(f"  Status: {metrics.status}")


def _run_radiation(args) -> None:
    """Print the radiation budget for one orbit and shielding thickness."""
    try:
        report = compute_radiation_environment(
            args.altitude, args.inclination, args.shielding, args.lifetime,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Region: {report.belt_region} (SAA exposure {report.saa_exposure})")
    print(f"  Unshielded dose: {report.unshielded_dose_krad_per_year:.3f} krad/yr")
    print(f"  Shielded dose:   {report.annual_dose_krad:.3f} krad/yr")
    print(f"  Mission total:   {report.mission_total_krad:.3f} krad")
    print(f"  Recommendation:  {report.recommendation}")
    print(f"  Status: {report.status}")


def _get_version() -> str:
    """Get package version string."""
    from satdesign.version import __version__
    return __version__


def main():
    parser = argparse.ArgumentParser(
        prog="satdesign",
        description="Satellite mission analysis: orbit, power, delta-V, link, radiation and lifetime budgets",
    )
    parser.add_argument(
        '--version', action='version',
        version=f"satdesign {_get_version()}",
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Run every budget for a mission JSON file",
    )
    analyze_parser.add_argument(
        '--input', '-i', required=True,
        help="Path to mission JSON file"
    )
    analyze_parser.add_argument(
        '--output', '-o',
        help="Path to write the JSON report"
    )

    # --- decay ---
    decay_parser = subparsers.add_parser(
        "decay",
        help="Propagate orbital decay and estimate lifetime",
    )
    decay_parser.add_argument('--altitude', type=float, required=True, help="Circular altitude (km)")
    decay_parser.add_argument(
        '--ballistic-coefficient', type=float, required=True,
        help="Cd * A / m (m²/kg)"
    )
    decay_parser.add_argument(
        '--inclination', type=float, default=51.6,
        help="Inclination (deg, default: 51.6)"
    )
    decay_parser.add_argument(
        '--horizon-years', type=float, default=25.0,
        help="Propagation horizon (default: 25 years)"
    )
    decay_parser.add_argument(
        '--solar-activity', choices=['low', 'moderate', 'high'], default='moderate',
        help="Solar activity level (default: moderate)"
    )
    decay_parser.add_argument('--export-csv', help="Export the decay profile to CSV")

    # --- constellation ---
    const_parser = subparsers.add_parser(
        "constellation",
        help="Summarize a Walker constellation",
    )
    const_parser.add_argument('--total', type=int, required=True, help="Total satellites T")
    const_parser.add_argument('--planes', type=int, required=True, help="Orbital planes P")
    const_parser.add_argument('--phasing', type=int, default=0, help="Phasing F (default: 0)")
    const_parser.add_argument('--altitude', type=float, required=True, help="Altitude (km)")
    const_parser.add_argument('--inclination', type=float, required=True, help="Inclination (deg)")
    const_parser.add_argument(
        '--type', choices=['delta', 'star'], default='delta',
        help="Walker pattern (default: delta)"
    )
    const_parser.add_argument(
        '--unit-mass', type=float, default=4.0,
        help="Mass per satellite (kg, default: 4.0)"
    )

    # --- radiation ---
    rad_parser = subparsers.add_parser(
        "radiation",
        help="Radiation dose budget",
    )
    rad_parser.add_argument('--altitude', type=float, required=True, help="Altitude (km)")
    rad_parser.add_argument('--inclination', type=float, required=True, help="Inclination (deg)")
    rad_parser.add_argument('--shielding', type=float, default=2.0, help="Aluminium thickness (mm)")
    rad_parser.add_argument('--lifetime', type=float, default=3.0, help="Mission duration (years)")

    args = parser.parse_args(sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Dispatch
    if args.command == "analyze":
        _run_analyze(args)
    elif args.command == "decay":
        _run_decay(args)
    elif args.command == "constellation":
        _run_constellation(args)
    elif args.command == "radiation":
        _run_radiation(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
