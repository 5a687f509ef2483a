# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the spacecraft bus configuration."""
import pytest

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.spacecraft import SpacecraftConfig


class TestDefaults:

    def test_form_factor_estimates(self):
        sc = SpacecraftConfig(dry_mass_kg=4.0)
        assert sc.effective_cross_section_m2 == 0.01
        assert sc.solar_array_area_m2 == 0.03

    def test_explicit_overrides(self):
        sc = SpacecraftConfig(dry_mass_kg=12.0, size="6U", cross_section_m2=0.05, solar_panel_area_m2=0.2)
        assert sc.effective_cross_section_m2 == 0.05
        assert sc.solar_array_area_m2 == 0.2

    def test_ballistic_coefficient(self):
        sc = SpacecraftConfig(dry_mass_kg=4.0)
        assert sc.ballistic_coefficient == pytest.approx(2.2 * 0.01 / 4.0)
        drag = sc.drag_config()
        assert drag.mass_kg == 4.0
        assert drag.area_m2 == 0.01

    def test_surface_material(self):
        sc = SpacecraftConfig(dry_mass_kg=4.0, surface_material="white-paint")
        assert sc.material.absorptivity == 0.20
        assert sc.material.emissivity == 0.90
        assert SpacecraftConfig(dry_mass_kg=4.0).material.name == "Black anodized aluminium"


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"dry_mass_kg": 0.0},
        {"dry_mass_kg": 4.0, "size": "7U"},
        {"dry_mass_kg": 4.0, "battery_capacity_wh": -1.0},
        {"dry_mass_kg": 4.0, "cross_section_m2": -0.1},
        {"dry_mass_kg": 4.0, "solar_panel_area_m2": -0.1},
        {"dry_mass_kg": 4.0, "solar_cell_efficiency": 1.2},
        {"dry_mass_kg": 4.0, "solar_panel_config": "gimballed"},
        {"dry_mass_kg": 4.0, "pointing_mode": "spinning"},
        {"dry_mass_kg": 4.0, "surface_material": "vantablack"},
        {"dry_mass_kg": 4.0, "drag_coefficient": 0.0},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(InvalidInputError):
            SpacecraftConfig(**kwargs)

    def test_zero_battery_allowed(self):
        assert SpacecraftConfig(dry_mass_kg=1.0, size="1U", battery_capacity_wh=0.0).battery_capacity_wh == 0.0
