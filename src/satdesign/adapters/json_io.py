# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON mission file I/O adapter.

Reads mission configuration files into MissionParameters and writes
analysis reports in JSON format.

Mission file layout (every section except orbit and spacecraft is optional):

    {
      "orbit": {"altitude_km": 500, "inclination_deg": 97.4},
      "spacecraft": {"dry_mass_kg": 4.0, "size": "3U", "battery_capacity_wh": 20},
      "subsystems": [{"id": "obc", "name": "OBC", "power_w": 0.5, "duty_cycle": 1.0}],
      "propulsion": {"type": "electric", "specific_impulse_s": 800, "propellant_mass_kg": 0.2},
      "maneuvers": [{"id": "raise", "name": "Orbit raise", "delta_v_ms": 20}],
      "link": {"tx_power_w": 2, "tx_antenna_gain_dbi": 6, "frequency_band": "S-band"},
      "constellation": {"type": "delta", "total_sats": 24, "planes": 6, "phasing": 1},
      "radiation": {"shielding_mm": 2.0},
      "mission": {"lifetime_years": 3, "solar_activity": "moderate", "epoch": "2026-03-20T12:00:00Z"}
    }

An orbit is given either by altitude_km (circular) or by semi_major_axis_km
with optional eccentricity, raan_deg, arg_perigee_deg and true_anomaly_deg.
"""
import json
import logging
from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, get_type_hints

from satdesign.domain.constellation import WalkerParams
from satdesign.domain.delta_v import Maneuver, PropulsionConfig
from satdesign.domain.link_budget import LinkBudgetParams, default_link_params
from satdesign.domain.mission_analysis import (
    MissionAnalysis,
    MissionParameters,
    analysis_to_dict,
    json_safe,
)
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.power_budget import DEFAULT_SUBSYSTEMS, PowerSubsystem
from satdesign.domain.propagation import OrbitalElements
from satdesign.domain.spacecraft import SpacecraftConfig

logger = logging.getLogger(__name__)


class MissionConfigError(ValueError):
    """Raised when a mission file is missing, malformed or inconsistent."""


def _section(data: dict, name: str, required: bool = False) -> dict | None:
    value = data.get(name)
    if value is None:
        if required:
            raise MissionConfigError(f"Missing required section '{name}'")
        return None
    if not isinstance(value, dict):
        raise MissionConfigError(f"Section '{name}' must be an object")
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(value: Any, key: str, section: str) -> float:
    if not _is_number(value):
        raise MissionConfigError(f"'{key}' in '{section}' must be a number, got {value!r}")
    return value


def _check_types(cls, values: dict, section: str) -> None:
    """Reject values whose JSON type does not match the dataclass field."""
    hints = get_type_hints(cls)
    for key, value in values.items():
        expected = hints.get(key)
        if value is None and expected in (float | None, int | None, str | None):
            continue
        if expected in (float, int, float | None, int | None):
            _number(value, key, section)
        elif expected in (str, str | None) and not isinstance(value, str):
            raise MissionConfigError(f"'{key}' in '{section}' must be a string, got {value!r}")
        elif expected is bool and not isinstance(value, bool):
            raise MissionConfigError(f"'{key}' in '{section}' must be true or false, got {value!r}")


def _build(cls, values: dict, section: str):
    """Construct a dataclass from a mapping, rejecting unknown keys and mistyped values."""
    if not isinstance(values, dict):
        raise MissionConfigError(f"Entries of '{section}' must be objects")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise MissionConfigError(f"Unknown keys in '{section}': {', '.join(unknown)}")
    _check_types(cls, values, section)
    try:
        return cls(**values)
    except TypeError as exc:
        raise MissionConfigError(f"Invalid '{section}' section: {exc}") from exc


def _parse_epoch(text: Any) -> datetime:
    if not isinstance(text, str):
        raise MissionConfigError(f"'epoch' in 'mission' must be an ISO 8601 string, got {text!r}")
    try:
        epoch = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise MissionConfigError(f"Invalid epoch '{text}': {exc}") from exc
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return epoch


def _orbit(values: dict) -> OrbitalElements:
    values = dict(values)
    if "altitude_km" in values:
        altitude = _number(values.pop("altitude_km"), "altitude_km", "orbit")
        if "semi_major_axis_km" in values:
            raise MissionConfigError("Give either 'altitude_km' or 'semi_major_axis_km' in 'orbit', not both")
        inclination = values.pop("inclination_deg", None)
        if inclination is None:
            raise MissionConfigError("Missing 'inclination_deg' in 'orbit'")
        _number(inclination, "inclination_deg", "orbit")
        circular = OrbitalElements.circular(altitude, inclination)
        values.setdefault("eccentricity", 0.0)
        return _build(
            OrbitalElements,
            {"semi_major_axis_km": circular.semi_major_axis_km, "inclination_deg": inclination, **values},
            "orbit",
        )
    return _build(OrbitalElements, values, "orbit")


class JsonMissionReader:
    """Reads mission configuration from JSON files."""

    def read_mission(self, path: str) -> MissionParameters:
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except OSError as exc:
            raise MissionConfigError(f"Cannot read mission file '{path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise MissionConfigError(f"Mission file '{path}' is not valid JSON: {exc}") from exc
        logger.debug("read mission file %s", path)
        return self.parse_mission(data)

    def parse_mission(self, data: Any) -> MissionParameters:
        if not isinstance(data, dict):
            raise MissionConfigError("Mission file must contain a JSON object")
        try:
            return self._parse(data)
        except (TypeError, AttributeError) as exc:
            raise MissionConfigError(f"Invalid mission file: {exc}") from exc

    def _parse(self, data: dict) -> MissionParameters:
        elements = _orbit(_section(data, "orbit", required=True))
        spacecraft = _build(SpacecraftConfig, _section(data, "spacecraft", required=True), "spacecraft")

        kwargs: dict[str, Any] = {"elements": elements, "spacecraft": spacecraft}

        raw_subsystems = data.get("subsystems")
        if raw_subsystems is None:
            kwargs["subsystems"] = DEFAULT_SUBSYSTEMS
        else:
            if not isinstance(raw_subsystems, list):
                raise MissionConfigError("Section 'subsystems' must be a list")
            kwargs["subsystems"] = tuple(_build(PowerSubsystem, s, "subsystems") for s in raw_subsystems)

        propulsion = _section(data, "propulsion")
        if propulsion is not None:
            kwargs["propulsion"] = _build(PropulsionConfig, propulsion, "propulsion")

        raw_maneuvers = data.get("maneuvers", [])
        if not isinstance(raw_maneuvers, list):
            raise MissionConfigError("Section 'maneuvers' must be a list")
        kwargs["maneuvers"] = tuple(_build(Maneuver, m, "maneuvers") for m in raw_maneuvers)

        link = _section(data, "link")
        if link is not None:
            defaults = default_link_params()
            merged = {f.name: getattr(defaults, f.name) for f in fields(LinkBudgetParams)}
            unknown = sorted(set(link) - set(merged))
            if unknown:
                raise MissionConfigError(f"Unknown keys in 'link': {', '.join(unknown)}")
            _check_types(LinkBudgetParams, link, "link")
            merged.update(link)
            kwargs["link"] = LinkBudgetParams(**merged)

        constellation = _section(data, "constellation")
        if constellation is not None:
            constellation = dict(constellation)
            unit_mass = constellation.pop("unit_sat_mass_kg", None)
            constellation.setdefault("altitude_km", elements.semi_major_axis_km - OrbitalConstants.R_EARTH_EQUATORIAL)
            constellation.setdefault("inclination_deg", elements.inclination_deg)
            kwargs["walker"] = _build(WalkerParams, constellation, "constellation")
            kwargs["unit_sat_mass_kg"] = unit_mass

        radiation = _section(data, "radiation")
        if radiation is not None:
            if set(radiation) - {"shielding_mm"}:
                raise MissionConfigError("Section 'radiation' accepts only 'shielding_mm'")
            if "shielding_mm" in radiation:
                kwargs["shielding_mm"] = _number(radiation["shielding_mm"], "shielding_mm", "radiation")

        mission = _section(data, "mission")
        if mission is not None:
            allowed = {"lifetime_years", "solar_activity", "horizon_years", "epoch"}
            unknown = sorted(set(mission) - allowed)
            if unknown:
                raise MissionConfigError(f"Unknown keys in 'mission': {', '.join(unknown)}")
            for key in ("lifetime_years", "horizon_years"):
                if key in mission:
                    kwargs[key] = _number(mission[key], key, "mission")
            if "solar_activity" in mission:
                if not isinstance(mission["solar_activity"], str):
                    raise MissionConfigError("'solar_activity' in 'mission' must be a string")
                kwargs["solar_activity"] = mission["solar_activity"]
            if mission.get("epoch") is not None:
                kwargs["epoch"] = _parse_epoch(mission["epoch"])

        return MissionParameters(**kwargs)


class JsonReportWriter:
    """Writes mission analysis reports to JSON files."""

    def write_report(self, report: MissionAnalysis | dict, path: str) -> None:
        body = analysis_to_dict(report) if isinstance(report, MissionAnalysis) else json_safe(report)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(body, f, indent=2, ensure_ascii=False, allow_nan=False)
        logger.debug("wrote report %s", path)
