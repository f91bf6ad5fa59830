"""Observable scalar market inputs.

The loss model reads correlation and recovery rates through the small
``ObservableValue`` capability: anything exposing ``value()`` and
``register_observer(callback)``. ``SimpleQuote`` is a minimal concrete
implementation that notifies its observers whenever its value changes.
"""

import logging
from typing import Callable, List, Protocol, Union, runtime_checkable

LOG = logging.getLogger("credit_lhp.quotes")


@runtime_checkable
class ObservableValue(Protocol):
    """A scalar input whose current value can change over time."""

    def value(self) -> float:
        ...

    def register_observer(self, callback: Callable[[], None]) -> None:
        ...


class SimpleQuote:
    """Mutable scalar quote that notifies observers on change."""

    def __init__(self, value: float):
        self._value = float(value)
        self._observers: List[Callable[[], None]] = []

    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        """Set a new value and notify observers if it differs.

        Args:
            value: The new quote value
        """
        value = float(value)
        if value == self._value:
            return
        LOG.debug(f"Quote value changed from {self._value} to {value}")
        self._value = value
        self.notify_observers()

    def register_observer(self, callback: Callable[[], None]) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unregister_observer(self, callback: Callable[[], None]) -> None:
        try:
            self._observers.remove(callback)
        except ValueError:
            raise KeyError("Observer not registered with quote") from None

    def notify_observers(self) -> None:
        for callback in list(self._observers):
            callback()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._value:.6f})"


class RecoveryRateQuote(SimpleQuote):
    """Quote holding a recovery rate, constrained to [0, 1]."""

    def __init__(self, value: float):
        _check_recovery(value)
        super().__init__(value)

    def set_value(self, value: float) -> None:
        _check_recovery(value)
        super().set_value(value)


def _check_recovery(value: float) -> None:
    if not 0 <= value <= 1:
        raise ValueError(f"Recovery rate must be between 0 and 1, got {value}")


QuoteLike = Union[float, ObservableValue]


def quote_value(quote: QuoteLike) -> float:
    """Return the current numeric value of a number or observable input."""
    if isinstance(quote, ObservableValue):
        return float(quote.value())
    return float(quote)
