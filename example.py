#!/usr/bin/env python3
"""Example usage of the Gaussian LHP tranche loss model.

This script demonstrates:
1. Building a homogeneous basket and tranche
2. Setting up the LHP loss model
3. Expected tranche loss and the tranche loss distribution
4. Percentile losses and expected shortfall
5. Reacting to a correlation quote change
"""

import datetime

from credit_lhp import (
    BasketSnapshot,
    DEFAULTS,
    GaussianLHPLossModel,
    SimpleQuote,
    TrancheRiskCalculator,
    create_tranche_report
)


def create_sample_basket() -> BasketSnapshot:
    """Create a 125 name basket with a 3%-7% mezzanine tranche."""
    num_names = DEFAULTS["num_names"]
    return BasketSnapshot.from_fractions(
        notionals=[10_000_000] * num_names,
        default_probabilities=[DEFAULTS["default_probability"]] * num_names,
        attachment=DEFAULTS["attachment"],
        detachment=DEFAULTS["detachment"],
        name="Sample Index",
    )


def main():
    """Run the example."""
    print("=" * 70)
    print("GAUSSIAN LHP TRANCHE LOSS MODEL - EXAMPLE")
    print("=" * 70)

    today = datetime.date.today()

    print("\n1. Creating sample basket...")
    basket = create_sample_basket()
    print(f"   Basket: {basket.name}")
    print(f"   Number of names: {len(basket)}")
    print(f"   Remaining notional: ${basket.remaining_notional(today):,.0f}")
    print(f"   Tranche: ${basket.remaining_attachment_amount():,.0f} - "
          f"${basket.remaining_detachment_amount():,.0f}")

    print("\n2. Setting up LHP model...")
    correlation = SimpleQuote(DEFAULTS["correlation"])
    recoveries = [DEFAULTS["recovery_rate"]] * len(basket)
    model = GaussianLHPLossModel(correlation, recoveries, basket=basket)
    print(f"   {model}")
    print(f"   Average default probability: {model.average_prob(today):.4f}")
    print(f"   Average recovery: {model.average_recovery(today):.4f}")

    print("\n3. Expected tranche loss...")
    calculator = TrancheRiskCalculator(model)
    el = model.expected_tranche_loss(today)
    notional = model.remaining_tranche_notional(today)
    print(f"   Tranche notional: ${notional:,.0f}")
    print(f"   Expected loss: ${el:,.0f} ({el / notional:.2%})")
    print("\n   Tranche loss distribution, P(loss >= fraction):")
    print(calculator.loss_distribution(today, num_points=11).to_string())

    print("\n4. Tail risk by percentile...")
    results = calculator.calculate_percentiles(today)
    report = create_tranche_report(results)
    display_cols = ['Percentile', 'Percentile_Loss_Fraction',
                    'Expected_Shortfall', 'Unexpected_Loss']
    print(report[display_cols].to_string(index=False))

    print("\n5. Bumping correlation to 0.35...")
    correlation.set_value(0.35)
    bumped = model.expected_tranche_loss(today)
    print(f"   Expected loss: ${bumped:,.0f} (change ${bumped - el:,.0f})")
    level = DEFAULTS["percentile"]
    print(f"   ES ({level:.0%}): ${model.expected_shortfall(today, level):,.0f}")

    print("\n" + "=" * 70)
    print("Example complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
