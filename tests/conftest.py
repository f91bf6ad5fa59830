"""Pytest fixtures for LHP loss model tests."""

import datetime

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from credit_lhp import (
    BasketSnapshot,
    GaussianLHPLossModel,
    SimpleQuote,
    RecoveryRateQuote,
)


@pytest.fixture
def valuation_date():
    """A fixed valuation date."""
    return datetime.date(2024, 6, 20)


@pytest.fixture
def single_name_basket():
    """One name, unit notional, 1% default probability, 3%-7% tranche."""
    return BasketSnapshot(
        notionals=[1.0],
        default_probabilities=[0.01],
        attachment_amount=0.03,
        detachment_amount=0.07,
    )


@pytest.fixture
def single_name_model(single_name_basket):
    """Model with correlation 0.2 and recovery 0.4 on the single name basket."""
    return GaussianLHPLossModel(0.2, [0.4], basket=single_name_basket)


@pytest.fixture
def index_basket():
    """A 125 name homogeneous basket with a 3%-7% tranche."""
    return BasketSnapshot.from_fractions(
        notionals=[1_000_000] * 125,
        default_probabilities=[0.03] * 125,
        attachment=0.03,
        detachment=0.07,
        name="Index",
    )


@pytest.fixture
def index_model(index_basket):
    """Model with correlation 0.3 and recovery 0.4 on the index basket."""
    return GaussianLHPLossModel(0.3, [0.4] * 125, basket=index_basket)


@pytest.fixture
def equity_basket():
    """A 10 name basket with a 0%-3% equity tranche."""
    return BasketSnapshot.from_fractions(
        notionals=[100.0] * 10,
        default_probabilities=[0.05] * 10,
        attachment=0.0,
        detachment=0.03,
    )


@pytest.fixture
def correlation_quote():
    """Observable correlation input."""
    return SimpleQuote(0.25)


@pytest.fixture
def recovery_quotes():
    """Observable recovery inputs for a 10 name basket."""
    return [RecoveryRateQuote(0.4) for _ in range(10)]
