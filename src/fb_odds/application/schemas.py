"""Pydantic schemas for fb_odds API."""

from pydantic import BaseModel, Field

from src.fb_odds.domain.models import BettingLine, TeamWeek

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TeamWeekIn(BaseModel):
    matchup_id: str
    team_id: str
    name: str = ""
    owner: str = ""
    points: float = 0.0
    custom_points: float | None = None
    starters: list[str] = Field(default_factory=list)
    starters_points: list[float] = Field(default_factory=list)
    wins: int | None = None
    losses: int | None = None
    points_for: float | None = None
    points_against: float | None = None

    def to_domain(self) -> TeamWeek:
        return TeamWeek(**self.model_dump())


class GenerateLinesRequest(BaseModel):
    teams: list[TeamWeekIn] = Field(..., description="Both sides of every matchup for the week")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TeamLineOut(BaseModel):
    team_id: str
    name: str
    owner: str
    projected: float
    record: str | None


class SpreadOut(BaseModel):
    favorite: str
    line: float
    odds: int


class TotalOut(BaseModel):
    line: float
    over_odds: int
    under_odds: int


class MoneylineOut(BaseModel):
    team1_odds: int
    team2_odds: int


class BettingLineOut(BaseModel):
    matchup_id: str
    week: int
    team1: TeamLineOut
    team2: TeamLineOut
    spread: SpreadOut
    total: TotalOut
    moneyline: MoneylineOut
    generated_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, line: BettingLine) -> "BettingLineOut":
        return cls.model_validate(line.to_dict())


class LinesResponse(BaseModel):
    week: int
    lines: list[BettingLineOut]
