"""Basket context consumed by the loss model.

The model never owns the basket: it only queries remaining notionals,
default probabilities and the tranche's remaining attachment and
detachment amounts as of a date. ``BasketSnapshot`` is a fixed-value
implementation for callers that already hold those numbers.
"""

from dataclasses import dataclass, field
from typing import Any, List, Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class BasketContext(Protocol):
    """Read-only view of a tranched basket."""

    def remaining_notional(self, d: Any) -> float:
        ...

    def remaining_notionals(self, d: Any) -> Sequence[float]:
        ...

    def remaining_probabilities(self, d: Any) -> Sequence[float]:
        ...

    def remaining_attachment_amount(self) -> float:
        ...

    def remaining_detachment_amount(self) -> float:
        ...

    def remaining_size(self) -> int:
        ...


@dataclass
class BasketSnapshot:
    """Basket context frozen at a single date.

    Attributes:
        notionals: Remaining notional of each live name
        default_probabilities: Default probability of each live name
        attachment_amount: Remaining tranche attachment, in notional units
        detachment_amount: Remaining tranche detachment, in notional units
    """
    notionals: List[float]
    default_probabilities: List[float]
    attachment_amount: float
    detachment_amount: float
    name: str = field(default="basket")

    def __post_init__(self):
        self.notionals = [float(n) for n in self.notionals]
        self.default_probabilities = [float(p) for p in self.default_probabilities]

        if len(self.notionals) != len(self.default_probabilities):
            raise ValueError(
                f"Got {len(self.notionals)} notionals but "
                f"{len(self.default_probabilities)} default probabilities"
            )
        if any(n < 0 for n in self.notionals):
            raise ValueError("Notionals must be non-negative")
        for p in self.default_probabilities:
            if not 0 <= p <= 1:
                raise ValueError(f"Default probability must be between 0 and 1, got {p}")
        if self.attachment_amount < 0:
            raise ValueError(
                f"Attachment amount must be non-negative, got {self.attachment_amount}"
            )
        if self.attachment_amount > self.detachment_amount:
            raise ValueError(
                f"Attachment amount {self.attachment_amount} exceeds "
                f"detachment amount {self.detachment_amount}"
            )

    @classmethod
    def from_fractions(cls, notionals: Sequence[float],
                       default_probabilities: Sequence[float],
                       attachment: float, detachment: float,
                       name: str = "basket") -> "BasketSnapshot":
        """Build a snapshot from tranche points quoted as basket fractions.

        Args:
            notionals: Remaining notional of each name
            default_probabilities: Default probability of each name
            attachment: Attachment point as a fraction of total notional
            detachment: Detachment point as a fraction of total notional

        Returns:
            BasketSnapshot with absolute attachment/detachment amounts
        """
        if not 0 <= attachment <= detachment <= 1:
            raise ValueError(
                f"Must have 0 <= attachment <= detachment <= 1, "
                f"got {attachment} and {detachment}"
            )
        total = float(np.sum(notionals))
        return cls(
            notionals=list(notionals),
            default_probabilities=list(default_probabilities),
            attachment_amount=attachment * total,
            detachment_amount=detachment * total,
            name=name,
        )

    def remaining_notional(self, d: Any = None) -> float:
        return float(np.sum(self.notionals))

    def remaining_notionals(self, d: Any = None) -> List[float]:
        return list(self.notionals)

    def remaining_probabilities(self, d: Any = None) -> List[float]:
        return list(self.default_probabilities)

    def remaining_attachment_amount(self) -> float:
        return self.attachment_amount

    def remaining_detachment_amount(self) -> float:
        return self.detachment_amount

    def remaining_size(self) -> int:
        return len(self.notionals)

    def __len__(self) -> int:
        return self.remaining_size()
