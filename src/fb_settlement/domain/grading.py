"""Grade a pending wager from final matchup scores."""

from src.fb_common.enums import BetType, TotalSide, WagerStatus
from src.fb_ledger.domain.models import Wager


def _outcome(margin: float) -> WagerStatus:
    # Fantasy scores carry two decimals; round away float noise before comparing.
    margin = round(margin, 2)
    if margin > 0:
        return WagerStatus.WON
    if margin < 0:
        return WagerStatus.LOST
    return WagerStatus.PUSH


def grade_wager(wager: Wager, scores: dict[str, float]) -> WagerStatus:
    """Return WON/LOST/PUSH for ``wager`` given ``{team_id: final_points}``.

    ``scores`` must hold exactly the two teams of the wager's matchup.
    Spread wagers add the locked handicap to the selected team's margin;
    total wagers compare the combined score with the locked total.
    """
    if len(scores) != 2:
        raise ValueError(f"Expected scores for 2 teams, got {len(scores)}")
    bet_type = BetType(wager.bet_type)

    if bet_type is BetType.TOTAL:
        if wager.line_value is None:
            raise ValueError(f"Total wager {wager.id} has no line value")
        diff = sum(scores.values()) - wager.line_value
        if wager.selection == TotalSide.UNDER.value:
            diff = -diff
        return _outcome(diff)

    if wager.selection not in scores:
        raise ValueError(f"Selection {wager.selection!r} not in matchup scores")
    opponent = next(t for t in scores if t != wager.selection)
    margin = scores[wager.selection] - scores[opponent]
    if bet_type is BetType.SPREAD:
        if wager.line_value is None:
            raise ValueError(f"Spread wager {wager.id} has no line value")
        margin += wager.line_value
    return _outcome(margin)
