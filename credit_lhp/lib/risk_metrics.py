"""Tranche risk metrics and reports built on the LHP loss model."""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from .model import GaussianLHPLossModel
from .params import DEFAULTS


@dataclass
class TrancheRiskResult:
    """Tranche risk figures at one date and percentile.

    Attributes:
        date: Date of the valuation
        tranche_notional: Live tranche notional
        expected_loss: Expected tranche loss
        percentile: Percentile level of the tail figures
        percentile_loss_fraction: Pool loss fraction at the percentile
        expected_shortfall: Expected tranche loss in the worst tail
        exhaustion_probability: Probability the tranche is wiped out
    """
    date: Any
    tranche_notional: float
    expected_loss: float
    percentile: float
    percentile_loss_fraction: float
    expected_shortfall: float
    exhaustion_probability: float

    @property
    def expected_loss_rate(self) -> float:
        """Expected loss per unit of tranche notional."""
        if self.tranche_notional == 0:
            return 0.0
        return self.expected_loss / self.tranche_notional

    @property
    def unexpected_loss(self) -> float:
        """Expected shortfall in excess of the expected loss."""
        return self.expected_shortfall - self.expected_loss


class TrancheRiskCalculator:
    """Calculate tranche risk metrics from an LHP loss model."""

    def __init__(self, model: GaussianLHPLossModel):
        """Initialize risk calculator.

        Args:
            model: Loss model with a basket attached
        """
        self.model = model

    def calculate(self, d: Any, percentile: Optional[float] = None) -> TrancheRiskResult:
        """Calculate all tranche metrics at a single percentile.

        Args:
            d: Date of the valuation
            percentile: Percentile level for the tail figures, defaults to
                ``DEFAULTS["percentile"]``

        Returns:
            TrancheRiskResult for the date and percentile
        """
        if percentile is None:
            percentile = DEFAULTS["percentile"]
        return TrancheRiskResult(
            date=d,
            tranche_notional=self.model.remaining_tranche_notional(d),
            expected_loss=self.model.expected_tranche_loss(d),
            percentile=percentile,
            percentile_loss_fraction=self.model.percentile_portfolio_loss_fraction(d, percentile),
            expected_shortfall=self.model.expected_shortfall(d, percentile),
            exhaustion_probability=self.model.prob_over_loss(d, 1.0),
        )

    def calculate_percentiles(self, d: Any,
                              percentiles: Sequence[float] = (0.9, 0.95, 0.99, 0.999)
                              ) -> List[TrancheRiskResult]:
        """Calculate tranche metrics for several percentile levels."""
        return [self.calculate(d, q) for q in percentiles]

    def loss_distribution(self, d: Any, num_points: int = 21) -> pd.Series:
        """Tail probabilities of the tranche loss on an even grid.

        Args:
            d: Date of the valuation
            num_points: Number of loss fractions in [0, 1]

        Returns:
            Series of P(tranche loss >= fraction) indexed by fraction
        """
        if num_points < 2:
            raise ValueError(f"Need at least 2 grid points, got {num_points}")
        fractions = np.linspace(0.0, 1.0, num_points)
        probs = [self.model.prob_over_loss(d, float(f)) for f in fractions]
        return pd.Series(probs, index=pd.Index(fractions, name="Loss_Fraction"),
                         name="Prob_Over_Loss")


def create_tranche_report(results: List[TrancheRiskResult]) -> pd.DataFrame:
    """Create a DataFrame report of tranche risk results.

    Args:
        results: List of TrancheRiskResult

    Returns:
        DataFrame with one row per result, sorted by percentile
    """
    data = []
    for result in results:
        data.append({
            'Date': result.date,
            'Percentile': result.percentile,
            'Tranche_Notional': result.tranche_notional,
            'Expected_Loss': result.expected_loss,
            'EL_Rate': result.expected_loss_rate,
            'Percentile_Loss_Fraction': result.percentile_loss_fraction,
            'Expected_Shortfall': result.expected_shortfall,
            'Unexpected_Loss': result.unexpected_loss,
            'Exhaustion_Probability': result.exhaustion_probability,
        })

    df = pd.DataFrame(data)
    if not df.empty:
        df = df.sort_values('Percentile').reset_index(drop=True)
    return df
