# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for CLI subcommand structure and output."""
import csv
import json
import os
import subprocess
import sys
import tempfile
import unittest


def _run(*args, timeout=60):
    return subprocess.run(
        [sys.executable, "-m", "satdesign.cli", *args],
        capture_output=True, text=True, timeout=timeout,
    )


MISSION = {
    "orbit": {"altitude_km": 500.0, "inclination_deg": 97.4},
    "spacecraft": {
        "dry_mass_kg": 10.0, "size": "6U", "battery_capacity_wh": 80.0,
        "solar_panel_area_m2": 0.12, "solar_panel_config": "2-axis-deployable",
        "pointing_mode": "sun-pointing",
    },
    "propulsion": {"type": "electric", "specific_impulse_s": 800.0, "propellant_mass_kg": 0.3},
    "constellation": {"type": "delta", "total_sats": 12, "planes": 3, "phasing": 1},
    "mission": {"lifetime_years": 3, "epoch": "2026-03-20T12:00:00Z"},
}


class TestCliVersion(unittest.TestCase):
    """satdesign --version prints version and exits."""

    def test_version_flag(self):
        result = _run("--version")
        self.assertEqual(result.returncode, 0)
        self.assertIn("satdesign", result.stdout)

    def test_version_is_semver(self):
        result = _run("--version")
        version_str = result.stdout.strip().split()[-1]
        parts = version_str.split(".")
        self.assertGreaterEqual(len(parts), 2)


class TestCliSubcommandHelp(unittest.TestCase):
    """Each subcommand has --help."""

    def test_analyze_help(self):
        result = _run("analyze", "--help")
        self.assertEqual(result.returncode, 0)
        self.assertIn("--input", result.stdout)
        self.assertIn("--output", result.stdout)

    def test_decay_help(self):
        result = _run("decay", "--help")
        self.assertEqual(result.returncode, 0)
        self.assertIn("--ballistic-coefficient", result.stdout)
        self.assertIn("--export-csv", result.stdout)

    def test_constellation_help(self):
        result = _run("constellation", "--help")
        self.assertEqual(result.returncode, 0)
        self.assertIn("--phasing", result.stdout)

    def test_radiation_help(self):
        result = _run("radiation", "--help")
        self.assertEqual(result.returncode, 0)
        self.assertIn("--shielding", result.stdout)

    def test_root_help_shows_subcommands(self):
        result = _run("--help")
        self.assertEqual(result.returncode, 0)
        for name in ("analyze", "decay", "constellation", "radiation"):
            self.assertIn(name, result.stdout)

    def test_no_subcommand_exits_nonzero(self):
        result = _run()
        self.assertEqual(result.returncode, 1)


class TestCliAnalyze(unittest.TestCase):

    def test_analyze_writes_report(self):
        with tempfile.TemporaryDirectory() as tmp:
            mission_path = os.path.join(tmp, "mission.json")
            report_path = os.path.join(tmp, "report.json")
            with open(mission_path, "w", encoding="utf-8") as f:
                json.dump(MISSION, f)
            result = _run("analyze", "-i", mission_path, "-o", report_path, timeout=120)
            self.assertEqual(result.returncode, 0, result.stderr)
            self.assertIn("Overall status:", result.stdout)
            self.assertIn("Constellation: 12 satellites", result.stdout)
            with open(report_path, encoding="utf-8") as f:
                report = json.load(f)
            self.assertIn(report["status"], ("nominal", "warning", "critical"))

    def test_missing_file_reports_error(self):
        result = _run("analyze", "-i", "does-not-exist.json")
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error:", result.stderr)

    def test_mistyped_field_reports_error(self):
        mission = dict(MISSION, orbit={"altitude_km": "500", "inclination_deg": 97.4})
        with tempfile.TemporaryDirectory() as tmp:
            mission_path = os.path.join(tmp, "mission.json")
            with open(mission_path, "w", encoding="utf-8") as f:
                json.dump(mission, f)
            result = _run("analyze", "-i", mission_path)
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error:", result.stderr)
        self.assertIn("altitude_km", result.stderr)
        self.assertNotIn("Traceback", result.stderr)


class TestCliDecay(unittest.TestCase):

    def test_deorbit_with_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            csv_path = os.path.join(tmp, "decay.csv")
            result = _run(
                "decay", "--altitude", "250", "--ballistic-coefficient", "0.0055",
                "--export-csv", csv_path,
            )
            self.assertEqual(result.returncode, 0, result.stderr)
            self.assertIn("Deorbited after", result.stdout)
            with open(csv_path, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
            self.assertEqual(rows[0], ["time_days", "altitude_km"])
            self.assertAlmostEqual(float(rows[-1][1]), 120.0)

    def test_unresolved(self):
        result = _run(
            "decay", "--altitude", "800", "--ballistic-coefficient", "0.0055",
            "--horizon-years", "1",
        )
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertIn("exceeded_horizon", result.stdout)

    def test_below_interface_is_error(self):
        result = _run("decay", "--altitude", "100", "--ballistic-coefficient", "0.0055")
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error:", result.stderr)


class TestCliConstellation(unittest.TestCase):

    def test_even_pattern(self):
        result = _run(
            "constellation", "--total", "24", "--planes", "6", "--phasing", "1",
            "--altitude", "550", "--inclination", "53",
        )
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertIn("Walker delta 24/6/1", result.stdout)
        self.assertIn("Status: nominal", result.stdout)

    def test_uneven_pattern_warns(self):
        result = _run(
            "constellation", "--total", "10", "--planes", "3",
            "--altitude", "550", "--inclination", "53",
        )
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertIn("3, 3, 4", result.stdout)
        self.assertIn("Status: warning", result.stdout)

    def test_invalid_pattern(self):
        result = _run(
            "constellation", "--total", "4", "--planes", "6",
            "--altitude", "550", "--inclination", "53",
        )
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error:", result.stderr)


class TestCliRadiation(unittest.TestCase):

    def test_radiation_summary(self):
        result = _run(
            "radiation", "--altitude", "550", "--inclination", "97.6",
            "--shielding", "2", "--lifetime", "3",
        )
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertIn("Mission total", result.stdout)
        self.assertIn("COTS components acceptable", result.stdout)

    def test_negative_shielding(self):
        result = _run("radiation", "--altitude", "550", "--inclination", "53", "--shielding", "-1")
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error:", result.stderr)


if __name__ == "__main__":
    unittest.main()
