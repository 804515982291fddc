"""Flatten league history into team-season records and index them by raw name."""

import logging
from collections import defaultdict
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from .models import TeamSeasonRecord
from .schemas import HistoricalSeason, LeagueHistory

logger = logging.getLogger('clutch_vault.history')


def _as_season_row(team: Any) -> HistoricalSeason | None:
    if isinstance(team, HistoricalSeason):
        return team
    if not isinstance(team, Mapping):
        logger.warning(f'Skipping history row that is not an object: {team!r}')
        return None
    try:
        return HistoricalSeason.model_validate(team)
    except ValidationError as e:
        logger.warning(f'Skipping unreadable history row: {e}')
        return None


def to_team_record(row: HistoricalSeason, season_year: int) -> TeamSeasonRecord | None:
    """Convert a history row to a TeamSeasonRecord, or None if it has no name."""
    raw_name = row.owner_name or row.team_name
    if not raw_name:
        return None

    return TeamSeasonRecord(
        raw_name=raw_name,
        season_year=season_year,
        team_name=row.team_name,
        owner_name=row.owner_name,
        wins=row.wins,
        losses=row.losses,
        ties=row.ties,
        points_for=row.points_for,
        points_against=row.points_against,
        playoff_result=row.playoff_result,
        id=None if row.id is None else str(row.id),
    )


def flatten_team_entries(seasons: LeagueHistory | Mapping[Any, Any] | None) -> list[TeamSeasonRecord]:
    """
    Flatten a season -> team rows mapping into TeamSeasonRecords.

    Rows whose owner and team names are both blank are skipped, and
    malformed numeric stats count as zero.

    Args:
        seasons: A LeagueHistory, a raw history response, or its 'seasons'
            mapping of year -> list of rows

    Returns:
        Records sorted by season year, newest first (input order within a year)
    """
    if seasons is None:
        return []
    if isinstance(seasons, LeagueHistory):
        seasons = seasons.seasons
    elif isinstance(seasons.get('seasons'), Mapping):
        # Whole history response rather than its seasons map
        seasons = seasons['seasons']

    entries = []
    for year_key, teams in seasons.items():
        try:
            season_year = int(year_key)
        except (TypeError, ValueError):
            logger.warning(f'Skipping season with unreadable year: {year_key!r}')
            continue

        if not isinstance(teams, list):
            continue

        for team in teams:
            row = _as_season_row(team)
            if row is None:
                continue
            record = to_team_record(row, season_year)
            if record is not None:
                entries.append(record)

    entries.sort(key=lambda e: e.season_year, reverse=True)
    logger.debug(f'Flattened {len(entries)} team-seasons')
    return entries


def unique_raw_names(entries: Iterable[TeamSeasonRecord]) -> list[str]:
    """Distinct raw names in first-seen order."""
    return list(dict.fromkeys(e.raw_name for e in entries))


def group_by_raw_name(entries: Iterable[TeamSeasonRecord]) -> dict[str, list[TeamSeasonRecord]]:
    """Map raw name -> its records, preserving the input (newest-first) order."""
    groups: dict[str, list[TeamSeasonRecord]] = defaultdict(list)
    for entry in entries:
        groups[entry.raw_name].append(entry)
    return dict(groups)


def name_to_years(entries: Iterable[TeamSeasonRecord]) -> dict[str, list[int]]:
    """Map raw name -> sorted distinct season years."""
    years: dict[str, set[int]] = defaultdict(set)
    for entry in entries:
        years[entry.raw_name].add(entry.season_year)
    return {name: sorted(seasons) for name, seasons in years.items()}


def available_years(entries: Iterable[TeamSeasonRecord]) -> list[int]:
    """Distinct season years, newest first."""
    return sorted({e.season_year for e in entries}, reverse=True)


def latest_season_entries(entries: list[TeamSeasonRecord]) -> list[TeamSeasonRecord]:
    """Records from the most recent season (empty if there are none)."""
    if not entries:
        return []
    latest = max(e.season_year for e in entries)
    return [e for e in entries if e.season_year == latest]
