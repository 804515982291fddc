"""Pydantic schemas for API payloads and configuration."""

from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator

from .utils import coerce_number


class HistoricalSeason(BaseModel):
    """One team-season row from the league history endpoint.

    Numeric stats are coerced rather than validated: imported data is
    frequently dirty and bad values count as zero.
    """

    id: str | None = None
    season_year: int | None = Field(None, alias='seasonYear')
    team_name: str = Field('', alias='teamName')
    owner_name: str = Field('', alias='ownerName')
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = Field(0.0, alias='pointsFor')
    points_against: float = Field(0.0, alias='pointsAgainst')
    playoff_result: str | None = Field(None, alias='playoffResult')

    @field_validator('wins', 'losses', 'ties', mode='before')
    @classmethod
    def coerce_count(cls, v):
        return int(coerce_number(v))

    @field_validator('points_for', 'points_against', mode='before')
    @classmethod
    def coerce_points(cls, v):
        return coerce_number(v)

    @field_validator('team_name', 'owner_name', mode='before')
    @classmethod
    def coerce_name(cls, v):
        return '' if v is None else str(v)

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        return None if v is None else str(v)

    @field_validator('season_year', mode='before')
    @classmethod
    def coerce_year(cls, v):
        year = int(coerce_number(v))
        return year or None

    @field_validator('playoff_result', mode='before')
    @classmethod
    def blank_result_is_none(cls, v):
        return v or None

    class Config:
        extra = 'allow'
        populate_by_name = True


class LeagueHistory(BaseModel):
    """Response of GET /imports/history/{leagueId}.

    Rows are kept as sent and only parsed by history.flatten_team_entries,
    which skips the ones it cannot read instead of rejecting the whole league.
    """

    league_id: str | None = Field(None, alias='leagueId')
    seasons: dict[str, list[Any]] = Field(default_factory=dict)
    total_seasons: int = Field(0, alias='totalSeasons')

    @field_validator('seasons', mode='before')
    @classmethod
    def normalize_seasons(cls, v):
        """Stringify year keys and drop years whose value is not a list."""
        if not v:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError('seasons must be an object keyed by season year')
        return {str(year): teams for year, teams in v.items() if isinstance(teams, list)}

    @field_validator('league_id', mode='before')
    @classmethod
    def stringify_league_id(cls, v):
        return None if v is None else str(v)

    @field_validator('total_seasons', mode='before')
    @classmethod
    def coerce_total(cls, v):
        return int(coerce_number(v))

    class Config:
        extra = 'allow'
        populate_by_name = True


class OwnerAlias(BaseModel):
    """Durable mapping from a raw team name to a canonical owner."""

    owner_name: str = Field(..., alias='ownerName')
    canonical_name: str = Field(..., alias='canonicalName')
    is_active: bool = Field(True, alias='isActive')

    @field_validator('is_active', mode='before')
    @classmethod
    def missing_means_active(cls, v):
        """Only an explicit false marks an owner inactive."""
        return v is not False

    class Config:
        extra = 'ignore'
        populate_by_name = True


class OwnerAliasesResponse(BaseModel):
    """Response of GET /leagues/{id}/owner-aliases."""

    aliases: list[OwnerAlias] = Field(default_factory=list)

    class Config:
        extra = 'allow'


class VaultConfig(BaseModel):
    """Client configuration settings."""

    api_url: str = Field('http://localhost:3001/api', min_length=1)
    api_token: str | None = None
    request_timeout: float = Field(30.0, gt=0, le=300)
    max_workers: int = Field(8, ge=1, le=64)

    @field_validator('api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    class Config:
        extra = 'forbid'


def dump_aliases(aliases: list[OwnerAlias]) -> list[dict[str, Any]]:
    """Serialize aliases to the camelCase request body shape."""
    return [alias.model_dump(by_alias=True) for alias in aliases]
