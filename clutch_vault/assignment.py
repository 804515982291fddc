"""Owner assignment wizard: reconcile raw team names into canonical owners.

The session walks a commissioner through three steps:

1. Identify owners (seeded from saved aliases or the latest season)
2. Assign every raw team name to an owner
3. Review the result and save it back as owner aliases
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Iterable, Optional

from .api_client import APIError
from .constants import (
    CHAMPION,
    OWNER_COLORS,
    STEP_IDENTIFY_OWNERS,
    WIZARD_STEPS,
)
from .history import (
    available_years,
    flatten_team_entries,
    group_by_raw_name,
    latest_season_entries,
    name_to_years,
    unique_raw_names,
)
from .models import (
    ClaimCard,
    NameCandidate,
    Owner,
    OwnerStat,
    OwnerSummary,
    Progress,
    TeamSeasonRecord,
    VaultStats,
)
from .name_detector import detect_names
from .schemas import LeagueHistory, OwnerAlias
from .validators import validate_alias_list
from .vault_stats import compute_vault_stats, owner_sort_key

logger = logging.getLogger('clutch_vault.assignment')

LOADING = 'loading'
READY = 'ready'
ERROR = 'error'

SORT_BY_SEASON = 'season'
SORT_ALPHA = 'alpha'


class OwnerAssignmentSession:
    """
    In-memory state for one league's owner assignment flow.

    Validation failures (blank or duplicate names, no active owner) return
    False instead of raising. API failures are caught at load() and save()
    and exposed verbatim through `error` and `save_error`.

    Undo is a log of inverse operations: each claim or unassign records the
    raw name and the owner it pointed at before. Undoing N claims restores
    the assignment map exactly as it was before them.

    Example:
        session = OwnerAssignmentSession(league_id, client)
        session.load()
        session.add_owner('Alice')
        session.set_active_owner('Alice')
        session.claim_for_active_owner('Touchdown Tyrants')
        session.save()
    """

    def __init__(self, league_id: str, client=None):
        self.league_id = league_id
        self.client = client

        # Loading
        self.state = LOADING
        self.error: Optional[str] = None
        self.league: Optional[dict[str, Any]] = None
        self.existing_aliases: list[OwnerAlias] = []
        self.initialized = False
        self.team_entries: list[TeamSeasonRecord] = []
        self._entries_by_name: dict[str, list[TeamSeasonRecord]] = {}
        self._years_by_name: dict[str, list[int]] = {}

        self.step = STEP_IDENTIFY_OWNERS

        # Step 1: owners, keyed by canonical name in insertion order
        self.owners: dict[str, Owner] = {}
        self.dismissed_detections: set[str] = set()

        # Step 2: raw name -> canonical owner name
        self.active_owner: Optional[str] = None
        self.assignments: dict[str, str] = {}
        self._undo_log: list[tuple[str, Optional[str]]] = []
        self.claiming: set[str] = set()
        self.last_claimed_name: Optional[str] = None

        # Step 3
        self.saving = False
        self.save_error: Optional[str] = None
        self.has_changes = False

    # Loading

    def load(self) -> bool:
        """
        Fetch league, history and aliases concurrently, then initialize.

        Returns:
            True when the session is ready, False when a fetch failed or
            returned unreadable data (the message is kept in `error`)
        """
        self.state = LOADING
        self.error = None

        try:
            with ThreadPoolExecutor(max_workers=3) as executor:
                league_future = executor.submit(self.client.get_league, self.league_id)
                history_future = executor.submit(self.client.get_league_history, self.league_id)
                aliases_future = executor.submit(self.client.get_owner_aliases, self.league_id)
                league = league_future.result()
                history = history_future.result()
                aliases = aliases_future.result()
        except APIError as e:
            return self._load_failed(e.message or 'Failed to load league data')
        except ValueError as e:
            # Payload came back but did not match the alias or history schema
            logger.debug(f'League {self.league_id} payload: {e}')
            return self._load_failed('League data could not be read')

        self.set_data(history, aliases, league=league)
        self.initialize()
        logger.info(
            f'League {self.league_id}: {len(self.team_entries)} team-seasons, '
            f'{len(self.existing_aliases)} saved aliases'
        )
        return True

    def _load_failed(self, message: str) -> bool:
        self.error = message
        self.state = ERROR
        logger.error(f'Could not load league {self.league_id}: {message}')
        return False

    def set_data(
        self,
        history: LeagueHistory | dict[Any, Any] | None,
        aliases: Optional[Iterable[OwnerAlias]] = None,
        league: Optional[dict[str, Any]] = None,
    ) -> None:
        """Attach already-fetched data (history response or its seasons map)."""
        self.league = league
        self.existing_aliases = list(aliases or [])
        self.team_entries = flatten_team_entries(history)
        self._entries_by_name = group_by_raw_name(self.team_entries)
        self._years_by_name = name_to_years(self.team_entries)
        self.state = READY

    def initialize(self) -> None:
        """
        Seed owners and assignments once.

        Saved aliases win: owners and assignments are rebuilt from them.
        Without aliases, every raw name in the most recent season becomes an
        owner and is assigned to itself. Either way the session stays on
        step 1 for confirmation. Later calls do nothing.
        """
        if self.initialized or self.state != READY:
            return

        owners: dict[str, Owner] = {}
        assignments: dict[str, str] = {}

        if self.existing_aliases:
            for alias in self.existing_aliases:
                canonical = alias.canonical_name
                if canonical not in owners:
                    owners[canonical] = Owner(
                        name=canonical,
                        color=OWNER_COLORS[len(owners) % len(OWNER_COLORS)],
                        is_active=alias.is_active,
                    )
                assignments[alias.owner_name] = canonical
                assignments.setdefault(canonical, canonical)

            for raw_name in self.unique_raw_names:
                if raw_name in owners and raw_name not in assignments:
                    assignments[raw_name] = raw_name
        else:
            for entry in latest_season_entries(self.team_entries):
                if entry.raw_name not in owners:
                    owners[entry.raw_name] = Owner(
                        name=entry.raw_name,
                        color=OWNER_COLORS[len(owners) % len(OWNER_COLORS)],
                    )

            for raw_name in self.unique_raw_names:
                if raw_name in owners:
                    assignments[raw_name] = raw_name

        self.owners = owners
        self.assignments = assignments
        self.initialized = True
        logger.debug(f'Initialized {len(owners)} owners and {len(assignments)} assignments')

    # Navigation

    def set_step(self, step: int) -> bool:
        if step not in WIZARD_STEPS:
            return False
        self.step = step
        return True

    @property
    def can_proceed_to_step2(self) -> bool:
        return len(self.owners) > 0

    @property
    def invite_code(self) -> Optional[str]:
        return (self.league or {}).get('inviteCode')

    # Derived data

    @property
    def unique_raw_names(self) -> list[str]:
        return unique_raw_names(self.team_entries)

    @property
    def raw_name_entries(self) -> dict[str, list[TeamSeasonRecord]]:
        """Raw name -> its team-seasons, newest first."""
        return self._entries_by_name

    @property
    def name_to_years(self) -> dict[str, list[int]]:
        return self._years_by_name

    @property
    def available_years(self) -> list[int]:
        return available_years(self.team_entries)

    @property
    def detected_names(self) -> list[NameCandidate]:
        """Raw names that look like people, minus dismissed suggestions."""
        names = [n for n in self.unique_raw_names if n not in self.dismissed_detections]
        return detect_names(names, self._years_by_name)

    @property
    def unclaimed_raw_names(self) -> list[str]:
        return [n for n in self.unique_raw_names if n not in self.assignments]

    def _card(self, raw_name: str, season_filter: Optional[int] = None) -> ClaimCard:
        entries = self._entries_by_name.get(raw_name, [])
        shown = entries if season_filter is None else [e for e in entries if e.season_year == season_filter]
        return ClaimCard(
            raw_name=raw_name,
            entries=shown,
            all_entries=entries,
            total_wins=sum(e.wins for e in entries),
            total_losses=sum(e.losses for e in entries),
            total_pf=sum(e.points_for for e in entries),
            has_championship=any(e.playoff_result == CHAMPION for e in entries),
            years=self._years_by_name.get(raw_name, []),
        )

    def unclaimed_cards(self, sort_mode: str = SORT_BY_SEASON, season_filter: Optional[int] = None) -> list[ClaimCard]:
        """
        Cards for raw names that are neither assigned nor being claimed.

        Args:
            sort_mode: 'season' (latest year first, then name) or 'alpha'
            season_filter: Only names that played this season; the card's
                entries are narrowed to it too

        Raises:
            ValueError: On an unknown sort mode
        """
        names = [n for n in self.unique_raw_names if n not in self.assignments and n not in self.claiming]
        if season_filter is not None:
            names = [
                n for n in names
                if any(e.season_year == season_filter for e in self._entries_by_name.get(n, []))
            ]

        cards = [self._card(n, season_filter) for n in names]

        if sort_mode == SORT_ALPHA:
            cards.sort(key=lambda c: c.raw_name.casefold())
        elif sort_mode == SORT_BY_SEASON:
            cards.sort(key=lambda c: (-max(c.years, default=0), c.raw_name.casefold()))
        else:
            raise ValueError(f'Unknown sort mode: {sort_mode}')

        return cards

    @property
    def claiming_cards(self) -> list[ClaimCard]:
        return [self._card(n) for n in sorted(self.claiming)]

    @property
    def owner_claimed_entries(self) -> dict[str, list[tuple[str, list[TeamSeasonRecord]]]]:
        """Owner -> [(raw name, entries)] for everything assigned to them."""
        claimed: dict[str, list[tuple[str, list[TeamSeasonRecord]]]] = {name: [] for name in self.owners}
        for raw_name, owner_name in self.assignments.items():
            claimed.setdefault(owner_name, []).append((raw_name, self._entries_by_name.get(raw_name, [])))
        return claimed

    @property
    def progress(self) -> Progress:
        total = len(self.unique_raw_names)
        claimed = len(self.assignments)
        per_owner = {name: 0 for name in self.owners}
        for owner_name in self.assignments.values():
            per_owner[owner_name] = per_owner.get(owner_name, 0) + 1
        return Progress(total=total, claimed=claimed, remaining=total - claimed, per_owner=per_owner)

    @property
    def owner_summaries(self) -> list[OwnerSummary]:
        """Per-owner totals over claimed team-seasons, most seasons first."""
        claimed = self.owner_claimed_entries
        summaries = []
        for name, owner in self.owners.items():
            summary = OwnerSummary(name=name, color=owner.color, is_active=owner.is_active)
            for _raw_name, entries in claimed.get(name, []):
                for e in entries:
                    summary.total_seasons += 1
                    summary.total_wins += e.wins
                    summary.total_losses += e.losses
                    summary.total_ties += e.ties
                    summary.total_pf += e.points_for
                    summary.total_pa += e.points_against
                    if e.playoff_result == CHAMPION:
                        summary.championships.append(e.season_year)
                    summary.teams.append(e)
            summary.teams.sort(key=lambda t: t.season_year, reverse=True)
            summary.claimed_raw_names = len(claimed.get(name, []))
            summaries.append(summary)

        summaries.sort(key=lambda s: s.total_seasons, reverse=True)
        return summaries

    @property
    def unassigned_entries(self) -> list[ClaimCard]:
        """Raw names still unassigned at review time, alphabetical."""
        return [self._card(n) for n in sorted(self.unclaimed_raw_names, key=str.casefold)]

    def vault_stats(self) -> VaultStats:
        """
        Vault rankings for the review step's reveal.

        Only assigned team-seasons count, but the in-progress season and the
        season total come from the whole league, so leaving this year's teams
        unassigned never turns last season into a live one. Every owner is
        listed (with zero totals when nothing is claimed yet) in its session
        color, and total_owners is the number of owners.
        """
        years = [e.season_year for e in self.team_entries if e.season_year]
        assigned = [e for e in self.team_entries if e.raw_name in self.assignments]
        stats = compute_vault_stats(assigned, self.build_aliases(), latest_season=max(years, default=None))

        by_name = {o.name: o for o in stats.owner_stats}
        owner_stats = []
        for name, owner in self.owners.items():
            stat = by_name.pop(name, None) or OwnerStat(name=name, color=owner.color)
            stat.color = owner.color
            stat.is_active = owner.is_active
            owner_stats.append(stat)
        owner_stats.extend(by_name.values())
        owner_stats.sort(key=owner_sort_key)

        league_stats = replace(
            stats.league_stats,
            total_seasons=len(set(years)),
            total_owners=len(self.owners),
        )
        return VaultStats(owner_stats=owner_stats, league_stats=league_stats, has_live_season=stats.has_live_season)

    # Step 1: owners

    def _name_taken(self, name: str, ignore: Optional[str] = None) -> bool:
        folded = name.casefold()
        return any(existing.casefold() == folded and existing != ignore for existing in self.owners)

    def add_owner(self, name: Optional[str], is_active: bool = True) -> bool:
        """Add an owner; False for a blank name or a case-insensitive duplicate."""
        trimmed = (name or '').strip()
        if not trimmed or self._name_taken(trimmed):
            return False

        self.owners[trimmed] = Owner(
            name=trimmed,
            color=OWNER_COLORS[len(self.owners) % len(OWNER_COLORS)],
            is_active=is_active,
        )
        self.has_changes = True
        return True

    def remove_owner(self, name: str) -> bool:
        """
        Delete an owner and unassign every raw name pointing at it.

        Unassigned names go back to the unclaimed pool; nothing is reassigned.

        Returns:
            True if the owner existed
        """
        existed = self.owners.pop(name, None) is not None

        self.assignments = {raw: owner for raw, owner in self.assignments.items() if owner != name}
        self._undo_log = [(raw, None if prev == name else prev) for raw, prev in self._undo_log]
        if self.active_owner == name:
            self.active_owner = None

        self.has_changes = True
        return existed

    def rename_owner(self, old_name: str, new_name: Optional[str]) -> bool:
        """
        Rename an owner, keeping its color and position.

        Fails (returns False, nothing changes) for a blank or unchanged name,
        an unknown owner, or a name another owner already uses.
        """
        trimmed = (new_name or '').strip()
        if not trimmed or trimmed == old_name or old_name not in self.owners:
            return False
        if self._name_taken(trimmed, ignore=old_name):
            return False

        renamed = {}
        for key, owner in self.owners.items():
            if key == old_name:
                renamed[trimmed] = Owner(name=trimmed, color=owner.color, is_active=owner.is_active)
            else:
                renamed[key] = owner
        self.owners = renamed

        self.assignments = {
            raw: trimmed if owner == old_name else owner for raw, owner in self.assignments.items()
        }
        self._undo_log = [(raw, trimmed if prev == old_name else prev) for raw, prev in self._undo_log]
        if self.active_owner == old_name:
            self.active_owner = trimmed

        self.has_changes = True
        return True

    def toggle_owner_active(self, name: str) -> Optional[bool]:
        """Flip an owner's active flag; returns the new value, or None if unknown."""
        owner = self.owners.get(name)
        if owner is None:
            return None
        owner.is_active = not owner.is_active
        self.has_changes = True
        return owner.is_active

    def dismiss_detection(self, name: str) -> None:
        self.dismissed_detections.add(name)

    # Step 2: assignments

    def set_active_owner(self, name: Optional[str]) -> bool:
        """Select the owner that claims go to (None clears the selection)."""
        if name is not None and name not in self.owners:
            return False
        self.active_owner = name
        return True

    def claim_for_active_owner(self, raw_name: str) -> bool:
        """Assign raw_name to the active owner; False if no owner is selected."""
        if not self.active_owner:
            return False

        self._undo_log.append((raw_name, self.assignments.get(raw_name)))
        self.assignments[raw_name] = self.active_owner
        self.last_claimed_name = raw_name
        self.has_changes = True
        return True

    def stage_claim(self, raw_name: str) -> bool:
        """Start an animated claim: hide the card until commit_claim()."""
        if not self.active_owner:
            return False
        self.claiming.add(raw_name)
        return True

    def commit_claim(self, raw_name: str) -> bool:
        """Finish an animated claim started with stage_claim()."""
        claimed = self.claim_for_active_owner(raw_name)
        self.claiming.discard(raw_name)
        return claimed

    def unassign_team(self, raw_name: str) -> None:
        self._undo_log.append((raw_name, self.assignments.get(raw_name)))
        self.assignments.pop(raw_name, None)
        self.has_changes = True

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_log)

    def undo(self) -> bool:
        """Revert the most recent claim or unassign. There is no redo."""
        if not self._undo_log:
            return False

        raw_name, previous = self._undo_log.pop()
        if previous is None:
            self.assignments.pop(raw_name, None)
        else:
            self.assignments[raw_name] = previous
        return True

    # Step 3: save

    def build_aliases(self) -> list[OwnerAlias]:
        """
        Aliases for the current assignments.

        One alias per assigned raw name, plus a self alias for each inactive
        owner that doesn't already have one, so inactivity survives a reload.
        """
        aliases = []
        for raw_name, canonical in self.assignments.items():
            owner = self.owners.get(canonical)
            aliases.append(
                OwnerAlias(
                    owner_name=raw_name,
                    canonical_name=canonical,
                    is_active=owner.is_active if owner else True,
                )
            )

        for name, owner in self.owners.items():
            if owner.is_active:
                continue
            if not any(a.owner_name == name and a.canonical_name == name for a in aliases):
                aliases.append(OwnerAlias(owner_name=name, canonical_name=name, is_active=False))

        return aliases

    def save(self) -> bool:
        """
        Send the alias batch to the backend.

        On failure the message goes to `save_error` and nothing else changes,
        so the user can simply retry.

        Returns:
            True if the aliases were saved
        """
        self.saving = True
        self.save_error = None
        aliases = self.build_aliases()

        for problem in validate_alias_list(aliases):
            logger.warning(f'League {self.league_id}: {problem}')

        try:
            self.client.save_owner_aliases(self.league_id, aliases)
        except APIError as e:
            self.save_error = e.message or 'Failed to save'
            logger.error(f'Saving aliases for league {self.league_id} failed: {self.save_error}')
            return False
        finally:
            self.saving = False

        self.existing_aliases = aliases
        self.has_changes = False
        logger.info(f'Saved {len(aliases)} aliases for league {self.league_id}')
        return True
