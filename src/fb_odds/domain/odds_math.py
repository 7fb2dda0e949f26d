"""Odds arithmetic for generated lines.

Pure functions, no I/O. All prices are integer American odds.

The moneyline uses a four-bucket probability ladder keyed on the projection
gap rather than a continuous curve; that coarseness is the league's house
rule. The underdog price is derived from ``1 - p`` with the same conversion,
so the two sides are symmetric but their implied probabilities sum to more
than 1 once rounded, which is where the house edge comes from.
"""

import math
from typing import Final

#: Over and under are both priced at flat vig.
TOTAL_ODDS: Final[int] = -110

#: (max gap, spread price); last bucket covers everything larger.
_SPREAD_ODDS_LADDER: Final[tuple[tuple[float, int], ...]] = (
    (3.0, -110),
    (7.0, -105),
    (14.0, -115),
)
_SPREAD_ODDS_BLOWOUT: Final[int] = -120

#: (max gap, favorite implied win probability).
_MONEYLINE_LADDER: Final[tuple[tuple[float, float], ...]] = (
    (3.0, 0.55),
    (7.0, 0.62),
    (14.0, 0.70),
)
_MONEYLINE_BLOWOUT_PROB: Final[float] = 0.78


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (-354.5 -> -354)."""
    return math.floor(value + 0.5)


def round_to_half_point(value: float) -> float:
    """Round to the nearest 0.5: 20.24 -> 20.0, 20.25 -> 20.5."""
    return math.floor(value * 2 + 0.5) / 2


def spread_odds(gap: float) -> int:
    """Tighter lines get better prices; blowout lines get worse ones."""
    for max_gap, odds in _SPREAD_ODDS_LADDER:
        if gap <= max_gap:
            return odds
    return _SPREAD_ODDS_BLOWOUT


def favorite_win_probability(gap: float) -> float:
    for max_gap, prob in _MONEYLINE_LADDER:
        if gap <= max_gap:
            return prob
    return _MONEYLINE_BLOWOUT_PROB


def probability_to_american(prob: float) -> int:
    """0.78 -> -355, 0.22 -> +355, 0.55 -> -122."""
    if not 0.0 < prob < 1.0:
        raise ValueError(f"Probability must be strictly between 0 and 1, got {prob}")
    if prob > 0.5:
        return round_half_up(-(prob / (1 - prob)) * 100)
    return round_half_up(((1 - prob) / prob) * 100)


def moneyline_odds(gap: float) -> tuple[int, int]:
    """(favorite odds, underdog odds) for an absolute projection gap."""
    fav_prob = favorite_win_probability(gap)
    return probability_to_american(fav_prob), probability_to_american(1 - fav_prob)
