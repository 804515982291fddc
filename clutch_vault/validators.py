"""Validation functions for owner aliases and imported team-season records."""

from typing import Iterable

from .constants import CHAMPION, PLAYOFF_RESULTS
from .models import TeamSeasonRecord
from .schemas import OwnerAlias


def validate_alias_list(aliases: Iterable[OwnerAlias]) -> list[str]:
    """
    Check an alias batch before it is saved.

    Checks:
    - Raw and canonical names are not blank
    - A raw name is not mapped to two different owners in one batch
      (the server keeps whichever comes last)

    Args:
        aliases: Aliases about to be sent

    Returns:
        List of problem descriptions (empty if clean)
    """
    errors = []
    seen: dict[str, str] = {}
    conflicts: set[str] = set()

    for alias in aliases:
        if not alias.owner_name.strip():
            errors.append(f'Alias for {alias.canonical_name!r} has a blank team name')
        if not alias.canonical_name.strip():
            errors.append(f'Alias for {alias.owner_name!r} has a blank owner name')

        previous = seen.get(alias.owner_name)
        if previous is not None and previous != alias.canonical_name:
            conflicts.add(alias.owner_name)
        seen[alias.owner_name] = alias.canonical_name

    if conflicts:
        errors.append(f'Team names mapped to more than one owner: {", ".join(sorted(conflicts))}')

    return errors


def validate_team_record(record: TeamSeasonRecord) -> list[str]:
    """
    Sanity-check one imported team-season.

    Checks:
    - No negative wins, losses, ties or points
    - Season year is set
    - Playoff result is a known value

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    label = f'{record.raw_name} ({record.season_year})'

    for stat in ('wins', 'losses', 'ties', 'points_for', 'points_against'):
        value = getattr(record, stat)
        if value < 0:
            warnings.append(f'{label} has negative {stat}: {value}')

    if not record.season_year:
        warnings.append(f'{record.raw_name} has no season year')

    if record.playoff_result and record.playoff_result not in PLAYOFF_RESULTS:
        warnings.append(f'{label} has unknown playoff result {record.playoff_result!r}')

    return warnings


def validate_team_records(records: Iterable[TeamSeasonRecord]) -> list[str]:
    """
    Sanity-check a league's imported history.

    Besides per-record checks, flags seasons with more than one champion.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings: list[str] = []
    champions: dict[int, list[str]] = {}

    for record in records:
        warnings.extend(validate_team_record(record))
        if record.playoff_result == CHAMPION:
            champions.setdefault(record.season_year, []).append(record.raw_name)

    for year in sorted(champions):
        names = champions[year]
        if len(names) > 1:
            warnings.append(f'{year} has {len(names)} champions: {", ".join(names)}')

    return warnings
