"""Core library modules for the LHP tranche loss model.

This subpackage contains the core implementation:
- normal: Univariate and bivariate normal distribution functions
- quotes: Observable scalar inputs (correlation, recovery rates)
- basket: Basket context consumed by the model
- model: Gaussian copula large homogeneous pool loss model
- params: Default parameters and model factory
- risk_metrics: Tranche risk figures and reports
"""

from .normal import (
    EPSILON,
    ONE_GUARD,
    BivariateCumulativeNormal,
    biphi,
    inverse_phi,
    phi
)
from .quotes import ObservableValue, SimpleQuote, RecoveryRateQuote, quote_value
from .basket import BasketContext, BasketSnapshot
from .model import GaussianLHPLossModel
from .params import DEFAULTS, build_model
from .risk_metrics import (
    TrancheRiskCalculator,
    TrancheRiskResult,
    create_tranche_report
)

__all__ = [
    # Normal distribution
    "EPSILON",
    "ONE_GUARD",
    "BivariateCumulativeNormal",
    "biphi",
    "inverse_phi",
    "phi",
    # Quotes
    "ObservableValue",
    "SimpleQuote",
    "RecoveryRateQuote",
    "quote_value",
    # Basket
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
