"""Gaussian copula large homogeneous pool (LHP) tranche loss model."""

import logging
import math
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .basket import BasketContext
from .normal import EPSILON, ONE_GUARD, BivariateCumulativeNormal, inverse_phi, phi
from .quotes import ObservableValue, QuoteLike, quote_value

LOG = logging.getLogger("credit_lhp.model")


class GaussianLHPLossModel:
    """One-factor Gaussian copula loss model under the LHP approximation.

    Each obligor's latent variable is:
        X_i = √ρ × Z + √(1 - ρ) × ε_i

    In the limit of an infinitely granular homogeneous pool the fraction of
    defaulted names conditional on the systematic factor Z is
        ℓ(Z) = Φ( (Φ⁻¹(p) - √ρ × Z) / √(1 - ρ) )
    and the pool loss is (1 - R) × ℓ(Z), with p the average default
    probability and R the average recovery of the basket.

    The correlation and recoveries may be plain numbers or observable
    values; observable inputs trigger ``update`` when they change.
    """

    def __init__(self, correlation: QuoteLike,
                 recoveries: Sequence[QuoteLike],
                 basket: Optional[BasketContext] = None):
        """Initialize the loss model.

        Args:
            correlation: Factor correlation ρ in [0, 1), a number or an
                observable value
            recoveries: Per-name recovery rates in [0, 1], each a number
                or an observable value
            basket: Optional basket context; can be attached later with
                ``set_basket``
        """
        self._correlation = correlation
        self._recoveries = list(recoveries)

        self._correl = 0.0
        self._sqrt_one_minus_correl = 1.0
        self._beta = 0.0
        self._biphi = BivariateCumulativeNormal(-1.0)

        self._basket: Optional[BasketContext] = None
        self._remaining_attach_amount = 0.0
        self._remaining_detach_amount = 0.0

        self.update()

        if isinstance(correlation, ObservableValue):
            correlation.register_observer(self.update)
        for rr in self._recoveries:
            if isinstance(rr, ObservableValue):
                rr.register_observer(self.update)

        if basket is not None:
            self.set_basket(basket)

    @property
    def correlation(self) -> float:
        """Factor correlation ρ the model currently prices with."""
        return self._correl

    @property
    def beta(self) -> float:
        """Factor loading √ρ."""
        return self._beta

    @property
    def sqrt_one_minus_correl(self) -> float:
        """Idiosyncratic weight √(1 - ρ)."""
        return self._sqrt_one_minus_correl

    @property
    def basket(self) -> Optional[BasketContext]:
        return self._basket

    def update(self) -> None:
        """Recompute the constants derived from the current inputs.

        Invoked at construction and whenever an observable input changes;
        call it explicitly after mutating inputs that cannot notify.
        """
        correl = quote_value(self._correlation)
        if not 0 <= correl < 1:
            raise ValueError(f"Correlation must be in [0, 1), got {correl}")
        for rr in self.recoveries():
            if not 0 <= rr <= 1:
                raise ValueError(f"Recovery rate must be between 0 and 1, got {rr}")

        self._correl = correl
        self._sqrt_one_minus_correl = math.sqrt(1.0 - correl)
        self._beta = math.sqrt(correl)
        self._biphi = BivariateCumulativeNormal(-self._sqrt_one_minus_correl)
        LOG.debug(f"Updated LHP model constants for correlation {correl}")

    def set_basket(self, basket: BasketContext) -> None:
        """Attach a basket and snapshot its remaining tranche amounts.

        Args:
            basket: The basket context to price against
        """
        if basket.remaining_size() > len(self._recoveries):
            raise ValueError(
                f"Basket has {basket.remaining_size()} live names but only "
                f"{len(self._recoveries)} recovery rates were given"
            )
        self._basket = basket
        self.reset_model()

    def reset_model(self) -> None:
        """Re-read the remaining attachment and detachment amounts."""
        basket = self._require_basket()
        self._remaining_attach_amount = float(basket.remaining_attachment_amount())
        self._remaining_detach_amount = float(basket.remaining_detachment_amount())
        LOG.debug(
            f"Reset LHP model tranche to [{self._remaining_attach_amount}, "
            f"{self._remaining_detach_amount}]"
        )

    def _require_basket(self) -> BasketContext:
        if self._basket is None:
            raise ValueError("Basket not set. Call set_basket first.")
        return self._basket

    def recoveries(self) -> List[float]:
        """Current recovery rate of every name."""
        return [quote_value(rr) for rr in self._recoveries]

    def expected_recovery(self, d: Any, name_index: int) -> float:
        """Recovery rate of a single name.

        Args:
            d: Date of the query (the recovery is date independent)
            name_index: Position of the name in the recovery sequence

        Returns:
            Current recovery rate of the name
        """
        return quote_value(self._recoveries[name_index])

    def average_prob(self, d: Any) -> float:
        """Arithmetic mean of the live names' default probabilities at d."""
        probs = np.asarray(self._require_basket().remaining_probabilities(d), dtype=float)
        if probs.size == 0:
            return 0.0
        return float(np.mean(probs))

    def average_recovery(self, d: Any) -> float:
        """Average recovery weighted by notional times default probability.

        Weighting by expected defaulted notional keeps the expected loss of
        the homogeneous pool equal to that of the original basket.

        Args:
            d: Date of the query

        Returns:
            Weighted average recovery, or 0 if no notional can default
        """
        basket = self._require_basket()
        probs = np.asarray(basket.remaining_probabilities(d), dtype=float)
        notionals = np.asarray(basket.remaining_notionals(d), dtype=float)
        recoveries = np.asarray(self.recoveries()[:basket.remaining_size()], dtype=float)

        weights = notionals * probs
        denominator = float(np.sum(weights))
        if denominator == 0.0:
            return 0.0
        return float(np.dot(recoveries, weights) / denominator)

    def expected_tranche_loss_impl(self, remaining_notional: float, prob: float,
                                   average_rr: float, attach_limit: float,
                                   detach_limit: float) -> float:
        """Closed form expected loss of a tranche of the homogeneous pool.

        With k = K / (1 - R) and c = Φ⁻¹(p):
            E[(ℓ - k)⁺] = Φ₂(-Φ⁻¹(k), c; -√(1 - ρ))
        and the tranche loss is the difference of the call spreads at the
        attachment and detachment points.

        Args:
            remaining_notional: Live basket notional at the pricing date
            prob: Average default probability at the pricing date
            average_rr: Average recovery rate at the pricing date
            attach_limit: Attachment as a fraction of the live notional
            detach_limit: Detachment as a fraction of the live notional

        Returns:
            Expected tranche loss in notional units
        """
        if remaining_notional < 0:
            raise ValueError(
                f"Remaining notional must be non-negative, got {remaining_notional}"
            )
        if not 0 <= prob <= 1:
            raise ValueError(f"Probability must be between 0 and 1, got {prob}")
        if not 0 <= average_rr <= 1:
            raise ValueError(f"Recovery rate must be between 0 and 1, got {average_rr}")

        if attach_limit >= detach_limit:
            return 0.0
        if remaining_notional == 0.0:
            return 0.0
        # full recovery, nothing can be lost
        if average_rr == 1.0:
            return 0.0

        max_loss = 1.0 - average_rr
        k1 = min(ONE_GUARD, attach_limit / max_loss) + EPSILON
        k2 = min(ONE_GUARD, detach_limit / max_loss) + EPSILON

        if prob <= 0.0:
            return 0.0

        ip = inverse_phi(prob)
        if k1 > 0.0:
            return remaining_notional * max_loss * (
                self._biphi(-inverse_phi(k1), ip) - self._biphi(-inverse_phi(k2), ip)
            )
        return remaining_notional * max_loss * (
            prob - self._biphi(-inverse_phi(k2), ip)
        )

    def expected_tranche_loss(self, d: Any) -> float:
        """Expected loss of the attached tranche at date d."""
        basket = self._require_basket()
        remaining_notional = float(basket.remaining_notional(d))
        if remaining_notional == 0.0:
            return 0.0

        attach = self._remaining_attach_amount / remaining_notional
        detach = self._remaining_detach_amount / remaining_notional
        return self.expected_tranche_loss_impl(
            remaining_notional, self.average_prob(d), self.average_recovery(d),
            attach, detach
        )

    def _tranche_fractions(self, d: Any) -> Tuple[float, float, float]:
        """Tranche points as fractions of the live notional, capped at 1."""
        remaining_notional = float(self._require_basket().remaining_notional(d))
        if remaining_notional == 0.0:
            return remaining_notional, 1.0, 1.0
        attach = min(self._remaining_attach_amount / remaining_notional, 1.0)
        detach = min(self._remaining_detach_amount / remaining_notional, 1.0)
        return remaining_notional, attach, detach

    def remaining_tranche_notional(self, d: Any) -> float:
        """Live tranche notional, the largest loss the tranche can take."""
        remaining_notional, attach, detach = self._tranche_fractions(d)
        return remaining_notional * max(detach - attach, 0.0)

    def prob_over_loss(self, d: Any, remaining_loss_fraction: float) -> float:
        """Probability that the tranche loses at least a given fraction.

        Args:
            d: Date of the query
            remaining_loss_fraction: Fraction of the live tranche notional
                in [0, 1]

        Returns:
            P(tranche loss >= fraction), including the probability mass of
            zero tranche loss when the fraction is zero
        """
        if not 0 <= remaining_loss_fraction <= 1:
            raise ValueError(
                f"Incorrect loss fraction, must be between 0 and 1, "
                f"got {remaining_loss_fraction}"
            )

        # tranche losses are never negative
        if remaining_loss_fraction <= EPSILON:
            return 1.0

        _, attach, detach = self._tranche_fractions(d)
        portf_fract = attach + remaining_loss_fraction * (detach - attach)

        average_rr = self.average_recovery(d)
        max_att_loss_fract = 1.0 - average_rr
        if portf_fract > max_att_loss_fract:
            return 0.0

        if portf_fract <= EPSILON:
            return 1.0

        prob = self.average_prob(d)
        if prob >= 1.0:
            return 1.0

        if self._beta == 0.0:
            # without correlation the pool loss is deterministic
            return 1.0 if portf_fract <= max_att_loss_fract * prob else 0.0

        ip = inverse_phi(prob)
        inv_flight_k = (
            ip - self._sqrt_one_minus_correl * inverse_phi(portf_fract / max_att_loss_fract)
        ) / self._beta
        return phi(inv_flight_k)

    def percentile_portfolio_loss_fraction(self, d: Any, perctl: float) -> float:
        """Pool loss, as a fraction of the live notional, at a percentile.

        Args:
            d: Date of the query
            perctl: Percentile in [0, 1]

        Returns:
            (1 - R) × Φ( (Φ⁻¹(p) + √ρ × Φ⁻¹(q)) / √(1 - ρ) )
        """
        if not 0 <= perctl <= 1:
            raise ValueError(f"Percentile argument out of bounds, got {perctl}")

        if perctl == 0.0:
            return 0.0
        if perctl == 1.0:
            perctl = 1.0 - EPSILON

        return (1.0 - self.average_recovery(d)) * phi(
            (inverse_phi(self.average_prob(d)) + self._beta * inverse_phi(perctl))
            / self._sqrt_one_minus_correl
        )

    def expected_shortfall(self, d: Any, perctl: float) -> float:
        """Expected tranche loss over the worst (1 - q) of outcomes.

        Args:
            d: Date of the query
            perctl: Percentile level q in [0, 1], e.g. 0.99

        Returns:
            Expected shortfall of the tranche in notional units
        """
        ptfl_loss_perc = self.percentile_portfolio_loss_fraction(d, perctl)

        remaining_notional, attach, detach = self._tranche_fractions(d)
        if detach <= attach:
            return 0.0

        if ptfl_loss_perc >= detach - EPSILON:
            return remaining_notional * (detach - attach)

        max_loss_level = max(attach, ptfl_loss_perc)

        if perctl == 1.0:
            # the tail has no mass left; use the worst percentile loss
            return remaining_notional * (max_loss_level - attach)

        prob = self.average_prob(d)
        average_rr = self.average_recovery(d)

        val_a = self.expected_tranche_loss_impl(
            remaining_notional, prob, average_rr, max_loss_level, detach
        )
        val_b = self.prob_over_loss(
            d, min(max((max_loss_level - attach) / (detach - attach), 0.0), 1.0)
        )
        return (val_a + (max_loss_level - attach) * remaining_notional * val_b) / (1.0 - perctl)

    def __repr__(self) -> str:
        return (
            f"GaussianLHPLossModel(correlation={self.correlation:.4f}, "
            f"num_names={len(self._recoveries)})"
        )
