"""Rate providers for the valuation layer.

The scheduler itself never observes market data; rates are needed only when
the schedule is valued. Providers answer ``get_rate(curve_name, tenor_months,
as_of)``.

References:
    ACTUS v1.1 Section 2.9 - Risk Factor Observer
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import jax.numpy as jnp

from pamsched.core.time import ActusDate
from pamsched.exceptions import ObserverError

# Tenor grid (months) of curves built with RateCurve.flat
FLAT_CURVE_TENORS: tuple[int, ...] = (1, 3, 6, 12, 24, 36, 60, 84, 120, 240, 360)


@runtime_checkable
class RateProvider(Protocol):
    """Protocol for interest rate sources."""

    def get_rate(self, curve_name: str, tenor_months: float, as_of: ActusDate) -> float:
        """Return the rate of ``curve_name`` for a tenor, observed at ``as_of``.

        Raises:
            ObserverError: If the provider has no data for the curve
        """
        ...


class ConstantRateProvider:
    """Provider returning the same rate for every curve, tenor and date.

    Example:
        >>> ConstantRateProvider(0.03).get_rate("USD-SOFR", 6, ActusDate(2024, 1, 1))
        0.03
    """

    def __init__(self, rate: float = 0.03) -> None:
        self.rate = float(rate)

    def get_rate(self, curve_name: str, tenor_months: float, as_of: ActusDate) -> float:  # noqa: ARG002
        return self.rate


@dataclass(frozen=True)
class RateCurve:
    """Term structure given as (tenor in months, rate) points.

    Rates between points are linearly interpolated; outside the first and last
    tenor the curve is flat.

    Attributes:
        as_of: Observation date of the curve
        points: (tenor_months, rate) pairs sorted by tenor

    Example:
        >>> curve = RateCurve(ActusDate(2024, 1, 1), ((12, 0.03), (24, 0.04)))
        >>> round(curve.get_rate(18), 6)
        0.035
    """

    as_of: ActusDate
    points: tuple[tuple[float, float], ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted((float(t), float(r)) for t, r in self.points))
        tenors = [t for t, _ in ordered]
        if len(set(tenors)) != len(tenors):
            raise ObserverError(
                "Rate curve has duplicate tenors", context={"tenors": tenors}
            )
        object.__setattr__(self, "points", ordered)

    @classmethod
    def flat(
        cls, as_of: ActusDate, rate: float, tenors: Iterable[int] = FLAT_CURVE_TENORS
    ) -> RateCurve:
        """Build a curve with the same rate at every standard tenor."""
        return cls(as_of, tuple((t, rate) for t in tenors))

    def with_point(self, tenor_months: float, rate: float) -> RateCurve:
        """Return a new curve with a point added or replaced."""
        points = {t: r for t, r in self.points}
        points[float(tenor_months)] = float(rate)
        return RateCurve(self.as_of, tuple(points.items()))

    @property
    def tenors(self) -> list[float]:
        return [t for t, _ in self.points]

    def get_rate(self, tenor_months: float, as_of: ActusDate | None = None) -> float:  # noqa: ARG002
        """Interpolate the rate for a tenor.

        Raises:
            ObserverError: If the curve has no points
        """
        if not self.points:
            raise ObserverError("Rate curve has no points", context={"as_of": self.as_of})
        for tenor, rate in self.points:
            if tenor == tenor_months:
                return rate
        tenors = jnp.array([t for t, _ in self.points])
        rates = jnp.array([r for _, r in self.points])
        return float(jnp.interp(float(tenor_months), tenors, rates))


class CurveRateProvider:
    """Provider backed by named rate curves.

    Example:
        >>> provider = CurveRateProvider({"EUR-ESTR": RateCurve.flat(ActusDate(2024, 1, 1), 0.035)})
        >>> provider.get_rate("EUR-ESTR", 12, ActusDate(2024, 1, 1))
        0.035
    """

    def __init__(self, curves: Mapping[str, RateCurve] | None = None) -> None:
        self._curves: dict[str, RateCurve] = dict(curves or {})

    def add_curve(self, name: str, curve: RateCurve) -> None:
        """Register or replace a curve."""
        self._curves[name] = curve

    @property
    def curve_names(self) -> list[str]:
        return sorted(self._curves)

    def get_rate(self, curve_name: str, tenor_months: float, as_of: ActusDate) -> float:
        try:
            curve = self._curves[curve_name]
        except KeyError:
            raise ObserverError(
                f"Curve not found: {curve_name}",
                context={"curve": curve_name, "available": self.curve_names},
            ) from None
        return curve.get_rate(tenor_months, as_of)
