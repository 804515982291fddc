"""Compute all-time owner rankings and league totals for the vault."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional

import polars as pl

from .constants import CHAMPION, OWNER_COLORS, UNKNOWN_OWNER
from .history import flatten_team_entries
from .models import BestSeason, LeagueStat, OwnerStat, TeamSeasonRecord, VaultStats
from .schemas import OwnerAlias

logger = logging.getLogger('clutch_vault.vault_stats')


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_aliases(aliases: Optional[Iterable[OwnerAlias | Mapping[str, Any]]]) -> list[OwnerAlias]:
    if not aliases:
        return []
    return [a if isinstance(a, OwnerAlias) else OwnerAlias.model_validate(a) for a in aliases]


def _assign_color(colors: dict[str, str], name: str) -> None:
    if name not in colors:
        colors[name] = OWNER_COLORS[len(colors) % len(OWNER_COLORS)]


def _best_season(completed: list[TeamSeasonRecord]) -> Optional[BestSeason]:
    """Highest single-season win%; ties go to the earliest season."""
    best = None
    for team in sorted(completed, key=lambda t: t.season_year):
        pct = team.win_pct
        if best is None or pct > best.pct:
            best = BestSeason(team=team.raw_name or team.team_name, season=team.season_year, pct=pct)
    return best


def _owner_stat(name: str, color: str, is_active: bool, teams: list[TeamSeasonRecord]) -> OwnerStat:
    completed = [t for t in teams if not t.in_progress]
    current = next((t for t in teams if t.in_progress), None)

    total_wins = sum(t.wins for t in completed)
    total_losses = sum(t.losses for t in completed)
    games = total_wins + total_losses
    championships = [t for t in completed if t.playoff_result == CHAMPION]

    return OwnerStat(
        name=name,
        color=color,
        is_active=is_active,
        teams=sorted(teams, key=lambda t: t.season_year, reverse=True),
        total_wins=total_wins,
        total_losses=total_losses,
        total_ties=sum(t.ties for t in completed),
        total_pf=sum(t.points_for for t in completed),
        total_pa=sum(t.points_against for t in completed),
        win_pct=total_wins / games if games > 0 else 0.0,
        titles=len(championships),
        championships=championships,
        season_count=len(completed) + (1 if current else 0),
        best_season=_best_season(completed),
        win_pcts=[t.win_pct for t in sorted(completed, key=lambda t: t.season_year)],
        current_season=current,
    )


def owner_sort_key(owner: OwnerStat) -> tuple[float, int, str]:
    """Ranking order: win% desc, then decided games desc, then name."""
    return (-owner.win_pct, -(owner.total_wins + owner.total_losses), owner.name.casefold())


def compute_vault_stats(
    history: Optional[Iterable[TeamSeasonRecord]],
    aliases: Optional[Iterable[OwnerAlias | Mapping[str, Any]]] = None,
    latest_season: Optional[int] = None,
) -> VaultStats:
    """
    Group team-seasons by canonical owner and compute vault statistics.

    Pure function: the same records and aliases (in the same order) always
    give the same rankings. Input records are not modified.

    Args:
        history: Flattened TeamSeasonRecords for the league
        aliases: OwnerAlias objects (or their wire dicts); raw names without
            an alias are their own canonical owner
        latest_season: The season that may be in progress. Defaults to the
            newest year in history; pass the league's newest year when
            history is only part of the league

    Returns:
        VaultStats with owners sorted by win% (then decided games, then name)

    Notes:
        Records in the latest season without a playoff result are in
        progress: they are reported as current_season and left out of
        every total, win% and title count.
    """
    records = list(history or [])
    if not records:
        return VaultStats()

    alias_map: dict[str, str] = {}
    active_owners: set[str] = set()
    colors: dict[str, str] = {}

    for alias in _as_aliases(aliases):
        alias_map[alias.owner_name] = alias.canonical_name
        if alias.is_active:
            active_owners.add(alias.canonical_name)
        _assign_color(colors, alias.canonical_name)

    years = [r.season_year for r in records if r.season_year]
    if latest_season is not None:
        max_year = latest_season
    else:
        max_year = max(years) if years else None

    teams_by_owner: dict[str, list[TeamSeasonRecord]] = {}
    has_live_season = False

    for record in records:
        raw_name = record.raw_name or record.team_name or UNKNOWN_OWNER
        canonical = alias_map.get(raw_name) or raw_name
        _assign_color(colors, canonical)

        in_progress = max_year is not None and record.season_year == max_year and not record.playoff_result
        has_live_season = has_live_season or in_progress

        teams_by_owner.setdefault(canonical, []).append(
            replace(record, raw_name=raw_name, team_name=record.team_name or raw_name, in_progress=in_progress)
        )

    owner_stats = [
        _owner_stat(
            name,
            colors[name],
            name in active_owners if active_owners else True,
            teams,
        )
        for name, teams in teams_by_owner.items()
    ]
    owner_stats.sort(key=owner_sort_key)

    league_stats = LeagueStat(
        total_seasons=len(set(years)),
        total_owners=len(owner_stats),
        total_games=_round_half_up(sum(o.total_wins + o.total_losses for o in owner_stats) / 2),
        total_points=_round_half_up(sum(o.total_pf for o in owner_stats)),
        total_titles=sum(o.titles for o in owner_stats),
    )

    logger.debug(
        f'Vault stats: {league_stats.total_owners} owners over {league_stats.total_seasons} seasons'
    )
    return VaultStats(owner_stats=owner_stats, league_stats=league_stats, has_live_season=has_live_season)


def load_vault_stats(client, league_id: str) -> VaultStats:
    """
    Fetch history and aliases for a league and compute its vault stats.

    Both requests run concurrently. APIError from either propagates.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        history_future = executor.submit(client.get_league_history, league_id)
        aliases_future = executor.submit(client.get_owner_aliases, league_id)
        history = history_future.result()
        aliases = aliases_future.result()

    records = flatten_team_entries(history)
    logger.info(f'Loaded {len(records)} team-seasons and {len(aliases)} aliases for league {league_id}')
    return compute_vault_stats(records, aliases)


def _team_to_dict(team: TeamSeasonRecord) -> dict[str, Any]:
    return {
        'seasonYear': team.season_year,
        'rawName': team.raw_name,
        'teamName': team.team_name,
        'record': team.record,
        'wins': team.wins,
        'losses': team.losses,
        'ties': team.ties,
        'pointsFor': team.points_for,
        'pointsAgainst': team.points_against,
        'playoffResult': team.playoff_result,
        'inProgress': team.in_progress,
    }


def vault_stats_to_dict(stats: VaultStats) -> dict[str, Any]:
    """JSON-ready (camelCase) form of the vault stats for web consumers."""
    owners = []
    for owner in stats.owner_stats:
        best = owner.best_season
        owners.append({
            'name': owner.name,
            'color': owner.color,
            'isActive': owner.is_active,
            'teams': [_team_to_dict(t) for t in owner.teams],
            'totalWins': owner.total_wins,
            'totalLosses': owner.total_losses,
            'totalTies': owner.total_ties,
            'totalPF': owner.total_pf,
            'totalPA': owner.total_pa,
            'winPct': owner.win_pct,
            'titles': owner.titles,
            'seasonCount': owner.season_count,
            'bestSeason': {'team': best.team, 'season': best.season, 'pct': best.pct} if best else None,
            'winPcts': owner.win_pcts,
            'currentSeason': _team_to_dict(owner.current_season) if owner.current_season else None,
        })

    league = stats.league_stats
    return {
        'ownerStats': owners,
        'leagueStats': {
            'totalSeasons': league.total_seasons,
            'totalOwners': league.total_owners,
            'totalGames': league.total_games,
            'totalPoints': league.total_points,
            'totalTitles': league.total_titles,
        },
        'hasLiveSeason': stats.has_live_season,
    }


def owner_stats_frame(stats: VaultStats) -> pl.DataFrame:
    """All-time rankings as a polars DataFrame (one row per owner, ranked)."""
    rows = []
    for rank, owner in enumerate(stats.owner_stats, 1):
        record = f'{owner.total_wins}-{owner.total_losses}'
        if owner.total_ties:
            record += f'-{owner.total_ties}'
        best = owner.best_season
        rows.append({
            'rank': rank,
            'owner': owner.name,
            'active': owner.is_active,
            'seasons': owner.season_count,
            'record': record,
            'win_pct': round(owner.win_pct, 3),
            'titles': owner.titles,
            'points_for': round(owner.total_pf, 1),
            'points_against': round(owner.total_pa, 1),
            'best_season': f'{best.season} {best.team}' if best else '',
        })

    schema = {
        'rank': pl.Int64,
        'owner': pl.Utf8,
        'active': pl.Boolean,
        'seasons': pl.Int64,
        'record': pl.Utf8,
        'win_pct': pl.Float64,
        'titles': pl.Int64,
        'points_for': pl.Float64,
        'points_against': pl.Float64,
        'best_season': pl.Utf8,
    }
    return pl.DataFrame(rows, schema=schema)
