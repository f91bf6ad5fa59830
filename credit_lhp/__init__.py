"""Gaussian copula large homogeneous pool model for credit tranches.

This package provides closed-form tranche analytics under a one-factor
Gaussian copula with the large homogeneous pool (LHP) approximation.

Main components:
- model: Expected tranche loss, tail probabilities, percentile losses
  and expected shortfall
- quotes: Observable correlation and recovery inputs
- basket: Basket context the model prices against
- risk_metrics: Tranche risk reports
"""

from .lib import (
    EPSILON,
    BivariateCumulativeNormal,
    biphi,
    inverse_phi,
    phi,
    ObservableValue,
    SimpleQuote,
    RecoveryRateQuote,
    BasketContext,
    BasketSnapshot,
    GaussianLHPLossModel,
    DEFAULTS,
    build_model,
    TrancheRiskCalculator,
    TrancheRiskResult,
    create_tranche_report
)

__version__ = "1.0.0"

__all__ = [
    # Normal distribution
    "EPSILON",
    "BivariateCumulativeNormal",
    "biphi",
    "inverse_phi",
    "phi",
    # Inputs
    "ObservableValue",
    "SimpleQuote",
    "RecoveryRateQuote",
    "BasketContext",
    "BasketSnapshot",
    # Model
    "GaussianLHPLossModel",
    "DEFAULTS",
    "build_model",
    # Risk metrics
    "TrancheRiskCalculator",
    "TrancheRiskResult",
    "create_tranche_report",
]
