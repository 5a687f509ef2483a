# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit lifetime and decay profile computation.

Numerical integration (forward Euler) of semi-major axis decay until the
atmospheric interface, using the drag decay rate of the atmosphere model.
The step adapts so that no step loses more than 1 % of the current
altitude, and the propagation always ends in a terminal outcome: deorbited
at a known time, or unresolved because the horizon or the step limit was
reached.

No external dependencies — only stdlib math/dataclasses/logging.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, Union

from satdesign.domain.atmosphere import semi_major_axis_decay_rate, solar_activity_multiplier
from satdesign.domain.errors import InvalidInputError
from satdesign.domain.orbital_mechanics import OrbitalConstants
from satdesign.domain.propagation import OrbitalElements, validate_elements

logger = logging.getLogger(__name__)

EXCEEDED_HORIZON = "exceeded_horizon"
EXCEEDED_STEP_LIMIT = "exceeded_step_limit"

_MAX_FRACTIONAL_ALTITUDE_LOSS = 0.01


@dataclass(frozen=True)
class DecayPoint:
    """Single point in an orbit decay profile."""
    time_days: float
    altitude_km: float


@dataclass(frozen=True)
class Deorbited:
    """Altitude reached the atmospheric interface at time_days."""
    time_days: float


@dataclass(frozen=True)
class Unresolved:
    """Propagation stopped before reaching the interface."""
    reason: str
    time_days: float


DecayOutcome = Union[Deorbited, Unresolved]


class DecayPropagation:
    """
    Single-pass decay profile.

    Iterating yields DecayPoint samples; once exhausted, ``outcome`` holds
    the terminal Deorbited or Unresolved state. Not restartable.
    """

    def __init__(
        self,
        a_km: float,
        ballistic_coefficient: float,
        horizon_days: float,
        solar_activity: str,
        max_step_days: float,
        interface_altitude_km: float,
        max_steps: int,
    ) -> None:
        self.ballistic_coefficient = ballistic_coefficient
        self.horizon_days = horizon_days
        self.solar_activity = solar_activity
        self.max_step_days = max_step_days
        self.interface_altitude_km = interface_altitude_km
        self.max_steps = max_steps
        self.outcome: DecayOutcome | None = None
        self._points = self._integrate(a_km)

    def __iter__(self) -> "DecayPropagation":
        return self

    def __next__(self) -> DecayPoint:
        return next(self._points)

    def _integrate(self, a_km: float) -> Iterator[DecayPoint]:
        interface = self.interface_altitude_km
        horizon = self.horizon_days
        t = 0.0
        altitude = a_km - OrbitalConstants.R_EARTH_EQUATORIAL
        yield DecayPoint(t, altitude)

        for _ in range(self.max_steps):
            if t >= horizon:
                self.outcome = Unresolved(EXCEEDED_HORIZON, t)
                logger.debug("decay unresolved: horizon %.1f days reached at %.1f km", horizon, altitude)
                return

            rate = semi_major_axis_decay_rate(a_km, self.ballistic_coefficient, self.solar_activity)
            dt = self.max_step_days
            if rate < 0:
                dt = min(dt, _MAX_FRACTIONAL_ALTITUDE_LOSS * altitude / -rate)
            dt = min(dt, horizon - t)

            new_altitude = altitude + rate * dt
            if new_altitude <= interface:
                # linear crossing time within the step
                t_cross = t + dt * (altitude - interface) / (altitude - new_altitude)
                self.outcome = Deorbited(t_cross)
                logger.debug("deorbited after %.1f days", t_cross)
                yield DecayPoint(t_cross, interface)
                return

            a_km += rate * dt
            altitude = new_altitude
            t += dt
            yield DecayPoint(t, altitude)

        reason = EXCEEDED_HORIZON if t >= horizon else EXCEEDED_STEP_LIMIT
        self.outcome = Unresolved(reason, t)
        logger.debug("decay unresolved (%s) after %d steps, %.1f days", reason, self.max_steps, t)


def propagate_decay(
    elements: OrbitalElements,
    ballistic_coefficient: float,
    horizon_years: float = 25.0,
    solar_activity: str = "moderate",
    max_step_days: float = 1.0,
    interface_altitude_km: float = OrbitalConstants.INTERFACE_ALTITUDE_KM,
    max_steps: int = 1_000_000,
) -> DecayPropagation:
    """
    Propagate semi-major axis decay from drag.

    da/dt = -rho(h) * B * sqrt(mu * a), stepped with
    dt = min(max_step_days, 0.01 * h / |dh/dt|).

    Args:
        elements: Initial orbit; its semi-major axis sets the altitude.
        ballistic_coefficient: C_d * A / m (m²/kg).
        horizon_years: Longest span to propagate.
        solar_activity: "low", "moderate" or "high".
        max_step_days: Upper bound on the integration step.
        interface_altitude_km: Altitude treated as re-entry.
        max_steps: Hard bound on the number of steps.

    Returns:
        DecayPropagation yielding DecayPoint samples lazily.

    Raises:
        InvalidInputError: If the orbit starts at or below the interface,
            B < 0, or the horizon, step or step limit is not positive.
    """
    validate_elements(elements)
    if ballistic_coefficient < 0:
        raise InvalidInputError(
            f"Ballistic coefficient must be non-negative, got {ballistic_coefficient} m²/kg"
        )
    if not horizon_years > 0:
        raise InvalidInputError(f"Horizon must be positive, got {horizon_years} years")
    if not max_step_days > 0:
        raise InvalidInputError(f"Maximum step must be positive, got {max_step_days} days")
    if max_steps < 1:
        raise InvalidInputError(f"Step limit must be at least 1, got {max_steps}")
    solar_activity_multiplier(solar_activity)

    altitude = elements.semi_major_axis_km - OrbitalConstants.R_EARTH_EQUATORIAL
    if altitude <= interface_altitude_km:
        raise InvalidInputError(
            f"Initial altitude {altitude:.1f} km already at or below "
            f"interface altitude {interface_altitude_km} km"
        )

    return DecayPropagation(
        elements.semi_major_axis_km,
        ballistic_coefficient,
        horizon_years * OrbitalConstants.DAYS_PER_YEAR,
        solar_activity,
        max_step_days,
        interface_altitude_km,
        max_steps,
    )


def estimate_lifetime(
    elements: OrbitalElements,
    ballistic_coefficient: float,
    horizon_years: float = 25.0,
    solar_activity: str = "moderate",
    **kwargs,
) -> DecayOutcome:
    """Run the decay propagation to completion and return its outcome."""
    propagation = propagate_decay(
        elements, ballistic_coefficient, horizon_years, solar_activity, **kwargs,
    )
    for _ in propagation:
        pass
    return propagation.outcome
