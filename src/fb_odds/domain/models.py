"""Domain models for fb_odds — pure dataclasses, no I/O."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from src.fb_common.enums import BetType, TotalSide


@dataclass
class TeamWeek:
    """One team's numbers for one week, as supplied by the projection source."""

    matchup_id: str
    team_id: str
    name: str
    owner: str
    points: float = 0.0
    custom_points: float | None = None
    starters: list[str] = field(default_factory=list)
    starters_points: list[float] = field(default_factory=list)
    wins: int | None = None
    losses: int | None = None
    points_for: float | None = None
    points_against: float | None = None

    @property
    def record(self) -> str | None:
        if self.wins is None or self.losses is None:
            return None
        return f"{self.wins}-{self.losses}"


@dataclass(frozen=True)
class TeamLine:
    team_id: str
    name: str
    owner: str
    projected: float
    record: str | None = None


@dataclass(frozen=True)
class SpreadLine:
    favorite: str    # team_id
    line: float      # magnitude, nearest 0.5
    odds: int        # American, same price both sides


@dataclass(frozen=True)
class TotalLine:
    line: float
    over_odds: int
    under_odds: int


@dataclass(frozen=True)
class MoneyLine:
    team1_odds: int
    team2_odds: int


@dataclass(frozen=True)
class Quote:
    """Price of one selection on a line: what a wager locks in."""

    bet_type: BetType
    selection: str
    odds: int
    line_value: float | None


@dataclass(frozen=True)
class BettingLine:
    matchup_id: str
    week: int
    team1: TeamLine
    team2: TeamLine
    spread: SpreadLine
    total: TotalLine
    moneyline: MoneyLine
    generated_at: datetime

    def team_ids(self) -> tuple[str, str]:
        return self.team1.team_id, self.team2.team_id

    def quote(self, bet_type: BetType, selection: str) -> Quote | None:
        """Current odds and line value for a selection, or None if it is not on this line.

        Spread line_value is the handicap applied to the selected team:
        negative for the favorite, positive for the underdog.
        """
        if bet_type is BetType.TOTAL:
            if selection == TotalSide.OVER.value:
                return Quote(bet_type, selection, self.total.over_odds, self.total.line)
            if selection == TotalSide.UNDER.value:
                return Quote(bet_type, selection, self.total.under_odds, self.total.line)
            return None

        if selection not in self.team_ids():
            return None
        if bet_type is BetType.SPREAD:
            handicap = -self.spread.line if selection == self.spread.favorite else self.spread.line
            return Quote(bet_type, selection, self.spread.odds, handicap)
        odds = (
            self.moneyline.team1_odds
            if selection == self.team1.team_id
            else self.moneyline.team2_odds
        )
        return Quote(bet_type, selection, odds, None)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BettingLine":
        return cls(
            matchup_id=data["matchup_id"],
            week=data["week"],
            team1=TeamLine(**data["team1"]),
            team2=TeamLine(**data["team2"]),
            spread=SpreadLine(**data["spread"]),
            total=TotalLine(**data["total"]),
            moneyline=MoneyLine(**data["moneyline"]),
            generated_at=datetime.fromisoformat(data["generated_at"]),
        )
