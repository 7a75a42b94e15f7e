"""Weighted random choice used by the generator."""

from bisect import bisect_right
from itertools import accumulate
from typing import Protocol, Sequence


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in ``[0, 1)``, e.g. ``random.Random``."""

    def random(self) -> float: ...


def weighted_choice[T](items: Sequence[tuple[T, int]], rng: RandomSource) -> T:
    """
    Pick one item with probability ``weight / total``.

    A single uniform draw is scaled to the total weight and located among the
    cumulative weights, so each item owns an interval as wide as its weight.

    :param items: ``(item, weight)`` pairs with positive integer weights.
    :param rng: Uniform random source; inject a seeded or fixed one in tests.
    :raises ValueError: If ``items`` is empty or a weight is not positive.
    """
    if not items:
        raise ValueError("cannot choose from an empty sequence")
    weights = [weight for _, weight in items]
    if any(weight <= 0 for weight in weights):
        raise ValueError("weights must be positive")

    cum_weights = list(accumulate(weights))
    total = cum_weights[-1]
    draw = rng.random() * total
    # min() guards against draw == total from float rounding
    idx = min(bisect_right(cum_weights, draw), len(items) - 1)
    return items[idx][0]
