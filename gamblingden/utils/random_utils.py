# File: utils/random_utils.py
"""Random source for GamblingDen payout decisions.

Every fairness-sensitive draw (crash points, slot stops, deck shuffles, the
daily bonus wheel) goes through random_int(), which samples the operating
system CSPRNG via ``secrets`` and removes modulo bias by rejection sampling.

Functions:
    - random_int: Uniform integer in [minimum, maximum] inclusive
    - shuffle: In-place Fisher-Yates shuffle driven by random_int
    - weighted_choice: Pick one option, optionally weighted
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
import secrets
from typing import TypeVar

T = TypeVar("T")

# Width of a single entropy draw
DRAW_BITS = 32


def random_int(minimum: int, maximum: int) -> int:
    """Return an integer uniformly distributed over [minimum, maximum].

    Draws DRAW_BITS-bit unsigned values and rejects those at or above the
    largest multiple of the range that fits, so ``draw % span`` is unbiased.
    Ranges wider than 2**32 widen the draw to the range's bit length.

    Args:
        minimum: Lower bound (inclusive)
        maximum: Upper bound (inclusive)

    Returns:
        The sampled integer, or minimum when the range is empty
    """
    span = maximum - minimum + 1
    if span <= 0:
        return minimum

    bits = max(DRAW_BITS, span.bit_length())
    limit = ((1 << bits) // span) * span
    while True:
        draw = secrets.randbits(bits)
        if draw < limit:
            return minimum + (draw % span)


def shuffle(items: MutableSequence[T]) -> MutableSequence[T]:
    """Shuffle items in place (Fisher-Yates) and return the same sequence."""
    for i in range(len(items) - 1, 0, -1):
        j = random_int(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def weighted_choice(options: Sequence[T], weights: Sequence[int] | None = None) -> T:
    """Pick one option.

    Without weights every option is equally likely. With integer weights the
    option is found by drawing a ticket in [1, total] and walking the
    cumulative weights.

    Args:
        options: Candidates to choose from (non-empty)
        weights: Optional non-negative integer weight per option

    Returns:
        The chosen option

    Raises:
        ValueError: If options is empty, lengths differ, a weight is negative,
            or weights sum to 0
    """
    if not options:
        raise ValueError("weighted_choice requires at least one option")
    if weights is None:
        return options[random_int(0, len(options) - 1)]
    if len(weights) != len(options):
        raise ValueError(
            f"weights length {len(weights)} does not match options length {len(options)}"
        )

    if any(weight < 0 for weight in weights):
        raise ValueError("weighted_choice weights must be non-negative")
    total = sum(weights)
    if total <= 0:
        raise ValueError("weighted_choice requires a positive total weight")

    ticket = random_int(1, total)
    cumulative = 0
    for option, weight in zip(options, weights, strict=True):
        cumulative += weight
        if ticket <= cumulative:
            return option
    return options[-1]
