# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Downlink budget.

Free-space path loss over the slant range to a ground station, Eb/N0 from
the link equation and the margin against the modulation's required Eb/N0.
The margin profile evaluates every elevation independently, so it can be
streamed or truncated freely.
"""
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.status import Status, classify_at_least

FREQUENCY_BANDS_HZ: dict[str, float] = {
    "UHF": 437e6,
    "S-band": 2.2e9,
    "X-band": 8.2e9,
    "Ka-band": 26.5e9,
}

MARGIN_NOMINAL_MIN_DB = 3.0
MARGIN_WARNING_MIN_DB = 0.0


@dataclass(frozen=True)
class LinkBudgetParams:
    """Transmitter, receiver and loss terms of a downlink."""
    tx_power_w: float
    tx_antenna_gain_dbi: float
    frequency_band: str
    rx_antenna_gain_dbi: float
    system_noise_temp_k: float
    data_rate_kbps: float
    required_ebn0_db: float
    atmospheric_loss_db: float = 0.0
    rain_loss_db: float = 0.0
    pointing_loss_db: float = 0.0
    misc_loss_db: float = 0.0

    @property
    def frequency_hz(self) -> float:
        return FREQUENCY_BANDS_HZ[self.frequency_band]

    @property
    def total_loss_db(self) -> float:
        return self.atmospheric_loss_db + self.rain_loss_db + self.pointing_loss_db + self.misc_loss_db


@dataclass(frozen=True)
class LinkBudgetResult:
    elevation_deg: float
    slant_range_km: float
    fspl_db: float
    eirp_dbw: float
    ebn0_db: float
    link_margin_db: float
    max_data_rate_kbps: float
    status: Status


@dataclass(frozen=True)
class LinkMarginPoint:
    elevation_deg: float
    link_margin_db: float
    ebn0_db: float
    slant_range_km: float
    fspl_db: float
    max_data_rate_kbps: float


def default_link_params(
    tx_power_w: float = 1.0,
    tx_antenna_gain_dbi: float = 2.0,
    frequency_band: str = "UHF",
    data_rate_kbps: float = 9.6,
) -> LinkBudgetParams:
    """Link parameters with a typical small-satellite ground segment."""
    return LinkBudgetParams(
        tx_power_w=tx_power_w,
        tx_antenna_gain_dbi=tx_antenna_gain_dbi,
        frequency_band=frequency_band,
        rx_antenna_gain_dbi=12.0,
        system_noise_temp_k=400.0,
        data_rate_kbps=data_rate_kbps,
        required_ebn0_db=9.6,
        atmospheric_loss_db=0.5,
        rain_loss_db=0.0,
        pointing_loss_db=1.0,
        misc_loss_db=2.0,
    )


def validate_link_params(params: LinkBudgetParams) -> None:
    if params.frequency_band not in FREQUENCY_BANDS_HZ:
        raise InvalidInputError(
            f"Unknown frequency band: {params.frequency_band!r} "
            f"(expected one of {list(FREQUENCY_BANDS_HZ)})"
        )
    if not params.tx_power_w > 0:
        raise InvalidInputError(f"Transmit power must be positive, got {params.tx_power_w} W")
    if not params.system_noise_temp_k > 0:
        raise InvalidInputError(
            f"System noise temperature must be positive, got {params.system_noise_temp_k} K"
        )
    if not params.data_rate_kbps > 0:
        raise InvalidInputError(f"Data rate must be positive, got {params.data_rate_kbps} kbps")


def slant_range(altitude_km: float, elevation_deg: float) -> float:
    """Distance (km) from a ground station to a satellite seen at an elevation."""
    r = OrbitalConstants.R_EARTH_EQUATORIAL
    h = altitude_km
    sin_el = math.sin(math.radians(elevation_deg))
    return -r * sin_el + math.sqrt(r**2 * sin_el**2 + 2.0 * r * h + h**2)


def free_space_path_loss(distance_km: float, frequency_hz: float) -> float:
    """FSPL = 20 log10(4 pi d f / c), in dB."""
    d_m = distance_km * 1000.0
    return 20.0 * math.log10(4.0 * math.pi * d_m * frequency_hz / OrbitalConstants.C_LIGHT)


def compute_link_budget(
    params: LinkBudgetParams,
    altitude_km: float,
    elevation_deg: float,
) -> LinkBudgetResult:
    """
    Evaluate the downlink at one elevation.

    Status is nominal at >= 3 dB margin, warning at >= 0 dB, critical below.

    Raises:
        InvalidInputError: On a non-positive altitude, an elevation outside
            [0, 90] deg or invalid link parameters.
    """
    validate_link_params(params)
    if not altitude_km > 0:
        raise InvalidInputError(f"Altitude must be positive, got {altitude_km} km")
    if not 0.0 <= elevation_deg <= 90.0:
        raise InvalidInputError(f"Elevation must be in [0, 90] deg, got {elevation_deg}")

    distance = slant_range(altitude_km, elevation_deg)
    fspl = free_space_path_loss(distance, params.frequency_hz)
    eirp = 10.0 * math.log10(params.tx_power_w) + params.tx_antenna_gain_dbi
    received = eirp - (fspl + params.total_loss_db) + params.rx_antenna_gain_dbi
    k_t = 10.0 * math.log10(OrbitalConstants.K_BOLTZMANN * params.system_noise_temp_k)
    c_n0 = received - k_t
    ebn0 = c_n0 - 10.0 * math.log10(params.data_rate_kbps * 1000.0)
    margin = ebn0 - params.required_ebn0_db
    max_rate_kbps = 10.0 ** ((c_n0 - params.required_ebn0_db) / 10.0) / 1000.0

    return LinkBudgetResult(
        elevation_deg=elevation_deg,
        slant_range_km=distance,
        fspl_db=fspl,
        eirp_dbw=eirp,
        ebn0_db=ebn0,
        link_margin_db=margin,
        max_data_rate_kbps=max_rate_kbps,
        status=classify_at_least(margin, MARGIN_NOMINAL_MIN_DB, MARGIN_WARNING_MIN_DB),
    )


class LinkMarginProfile:
    """
    Finite, restartable link margin sweep over elevation.

    Each iteration recomputes the samples from the lowest elevation.
    """

    def __init__(
        self,
        params: LinkBudgetParams,
        altitude_km: float,
        elevations_deg: np.ndarray,
    ) -> None:
        self.params = params
        self.altitude_km = altitude_km
        self.elevations_deg = elevations_deg

    def __len__(self) -> int:
        return len(self.elevations_deg)

    def __iter__(self) -> Iterator[LinkMarginPoint]:
        for el in self.elevations_deg:
            result = compute_link_budget(self.params, self.altitude_km, float(el))
            yield LinkMarginPoint(
                elevation_deg=result.elevation_deg,
                link_margin_db=result.link_margin_db,
                ebn0_db=result.ebn0_db,
                slant_range_km=result.slant_range_km,
                fspl_db=result.fspl_db,
                max_data_rate_kbps=result.max_data_rate_kbps,
            )


def compute_link_margin_profile(
    params: LinkBudgetParams,
    avg_altitude_km: float,
    min_elevation_deg: float = 5.0,
    max_elevation_deg: float = 90.0,
    step_deg: float = 1.0,
) -> LinkMarginProfile:
    """
    Link margin versus elevation, from min to max inclusive.

    Raises:
        InvalidInputError: If the step is not positive, the range is empty
            or outside [0, 90] deg, or the parameters are invalid.
    """
    validate_link_params(params)
    if not avg_altitude_km > 0:
        raise InvalidInputError(f"Altitude must be positive, got {avg_altitude_km} km")
    if not step_deg > 0:
        raise InvalidInputError(f"Elevation step must be positive, got {step_deg} deg")
    if not 0.0 <= min_elevation_deg <= max_elevation_deg <= 90.0:
        raise InvalidInputError(
            f"Elevation range [{min_elevation_deg}, {max_elevation_deg}] must lie within [0, 90] deg"
        )
    elevations = np.arange(min_elevation_deg, max_elevation_deg + step_deg * 1e-6, step_deg)
    elevations = np.minimum(elevations, max_elevation_deg)
    return LinkMarginProfile(params, avg_altitude_km, elevations)
