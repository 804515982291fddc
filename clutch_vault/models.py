"""Data models for owner reconciliation and vault statistics."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class TeamSeasonRecord:
    """One fantasy team's result in one season, as imported."""
    raw_name: str
    season_year: int
    team_name: str = ''
    owner_name: str = ''
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    playoff_result: Optional[str] = None
    in_progress: bool = False  # Latest season with no playoff result yet
    id: Optional[str] = None

    @property
    def record(self) -> str:
        """Record string like '10-4' or '9-4-1'."""
        text = f'{self.wins}-{self.losses}'
        if self.ties:
            text += f'-{self.ties}'
        return text

    @property
    def games(self) -> int:
        """Decided games (ties excluded)."""
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        return self.wins / self.games if self.games > 0 else 0.0


@dataclass
class Owner:
    """Canonical owner identity under construction in an assignment session."""
    name: str
    color: str
    is_active: bool = True


@dataclass
class NameCandidate:
    """Raw name that probably contains a person's first name."""
    name: str
    matched_word: str
    seasons: List[int] = field(default_factory=list)


@dataclass
class BestSeason:
    team: str
    season: int
    pct: float


@dataclass
class OwnerStat:
    """All-time statistics for one canonical owner."""
    name: str
    color: str
    is_active: bool = True
    teams: List[TeamSeasonRecord] = field(default_factory=list)  # Newest first
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    total_pf: float = 0.0
    total_pa: float = 0.0
    win_pct: float = 0.0
    titles: int = 0
    championships: List[TeamSeasonRecord] = field(default_factory=list)
    season_count: int = 0
    best_season: Optional[BestSeason] = None
    win_pcts: List[float] = field(default_factory=list)  # Chronological, for sparklines
    current_season: Optional[TeamSeasonRecord] = None


@dataclass
class LeagueStat:
    total_seasons: int = 0
    total_owners: int = 0
    total_games: int = 0
    total_points: int = 0
    total_titles: int = 0


@dataclass
class VaultStats:
    """Output of the vault aggregator."""
    owner_stats: List[OwnerStat] = field(default_factory=list)
    league_stats: LeagueStat = field(default_factory=LeagueStat)
    has_live_season: bool = False


@dataclass
class ClaimCard:
    """One raw name shown in the assignment grid."""
    raw_name: str
    entries: List[TeamSeasonRecord] = field(default_factory=list)
    all_entries: List[TeamSeasonRecord] = field(default_factory=list)
    total_wins: int = 0
    total_losses: int = 0
    total_pf: float = 0.0
    has_championship: bool = False
    years: List[int] = field(default_factory=list)


@dataclass
class OwnerSummary:
    """Review-step totals over everything claimed for one owner."""
    name: str
    color: str
    is_active: bool = True
    total_seasons: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    total_pf: float = 0.0
    total_pa: float = 0.0
    championships: List[int] = field(default_factory=list)  # Title years
    teams: List[TeamSeasonRecord] = field(default_factory=list)
    claimed_raw_names: int = 0


@dataclass
class Progress:
    total: int = 0
    claimed: int = 0
    remaining: int = 0
    per_owner: Dict[str, int] = field(default_factory=dict)
