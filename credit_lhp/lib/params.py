"""Default parameters for the LHP loss model."""

from typing import Any, Dict, Optional

from .basket import BasketContext, BasketSnapshot
from .model import GaussianLHPLossModel

DEFAULTS: Dict[str, Any] = {
    "correlation": 0.2,         # factor correlation ρ
    "recovery_rate": 0.4,       # recovery assumed for every name
    "num_names": 125,           # names in the reference basket
    "notional": 1.0,            # notional per name
    "default_probability": 0.01,
    "attachment": 0.03,         # tranche points as basket fractions
    "detachment": 0.07,
    "percentile": 0.99,         # expected shortfall level
}


def build_model(params: Optional[Dict[str, Any]] = None,
                basket: Optional[BasketContext] = None) -> GaussianLHPLossModel:
    """Build a homogeneous LHP model from parameters.

    Args:
        params: Overrides for keys of ``DEFAULTS``
        basket: Basket to attach; if None a homogeneous ``BasketSnapshot``
            is built from the parameters

    Returns:
        GaussianLHPLossModel with the basket attached
    """
    config = dict(DEFAULTS)
    if params:
        unknown = set(params) - set(DEFAULTS)
        if unknown:
            raise KeyError(f"Unknown parameters: {sorted(unknown)}")
        config.update(params)

    num_names = int(config["num_names"])
    if num_names <= 0:
        raise ValueError(f"Number of names must be positive, got {num_names}")

    if basket is None:
        basket = BasketSnapshot.from_fractions(
            notionals=[config["notional"]] * num_names,
            default_probabilities=[config["default_probability"]] * num_names,
            attachment=config["attachment"],
            detachment=config["detachment"],
        )

    recoveries = [config["recovery_rate"]] * max(num_names, basket.remaining_size())
    return GaussianLHPLossModel(config["correlation"], recoveries, basket=basket)
