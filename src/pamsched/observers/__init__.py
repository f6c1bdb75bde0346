"""Rate providers for market data used when valuing schedules."""

from pamsched.observers.rates import (
    FLAT_CURVE_TENORS,
    ConstantRateProvider,
    CurveRateProvider,
    RateCurve,
    RateProvider,
)

__all__ = [
    "RateProvider",
    "ConstantRateProvider",
    "CurveRateProvider",
    "RateCurve",
    "FLAT_CURVE_TENORS",
]
