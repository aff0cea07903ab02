# cart_sync/signals.py

"""
CART SYNC SIGNALS

Closed variant:
    Increment(magnitude) | Decrement(magnitude) | Refresh

Increment/Decrement are optimistic guesses. Refresh means: drop the
guess and re-read the authoritative count.

The loose event dict ({"type", "optimistic", "count"}) only exists at the
edge (signal_from_event / signal_to_event). Anything that doesn't parse
there becomes Refresh.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

INCREMENT = "increment"
DECREMENT = "decrement"
REFRESH = "refresh"


def _check_magnitude(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("magnitude must be a positive integer")


@dataclass(frozen=True)
class Increment:
    magnitude: int = 1

    kind = INCREMENT

    def __post_init__(self):
        _check_magnitude(self.magnitude)

    @property
    def optimistic(self) -> bool:
        return True

    def inverse(self) -> "Decrement":
        return Decrement(self.magnitude)


@dataclass(frozen=True)
class Decrement:
    magnitude: int = 1

    kind = DECREMENT

    def __post_init__(self):
        _check_magnitude(self.magnitude)

    @property
    def optimistic(self) -> bool:
        return True

    def inverse(self) -> Increment:
        return Increment(self.magnitude)


@dataclass(frozen=True)
class Refresh:
    kind = REFRESH

    @property
    def optimistic(self) -> bool:
        return False


CartSyncSignal = Union[Increment, Decrement, Refresh]


def signal_for_delta(delta: int) -> CartSyncSignal | None:
    """Optimistic signal for a quantity change, None when nothing changed."""
    if delta > 0:
        return Increment(delta)
    if delta < 0:
        return Decrement(-delta)
    return None


# =====================================================
# EVENT BOUNDARY
# =====================================================


def signal_from_event(detail: Any) -> CartSyncSignal:
    if not isinstance(detail, dict):
        return Refresh()

    kind = detail.get("type")
    if kind not in (INCREMENT, DECREMENT) or not detail.get("optimistic"):
        return Refresh()

    count = detail.get("count", 1)
    if count is None:
        count = 1
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        return Refresh()

    return Increment(count) if kind == INCREMENT else Decrement(count)


def signal_to_event(signal: CartSyncSignal) -> dict[str, Any]:
    if isinstance(signal, Refresh):
        return {"type": REFRESH}
    return {"type": signal.kind, "optimistic": True, "count": signal.magnitude}
