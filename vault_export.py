#!/usr/bin/env python3
"""
League Vault exporter

Computes all-time owner rankings for a league from its imported history and
saved owner aliases, then writes them as JSON (and optionally CSV).

Data comes from the Clutch API (CLUTCH_API_URL / CLUTCH_TOKEN) or from local
JSON exports of the same endpoints.

Usage:
    python vault_export.py --league-id abc123
    python vault_export.py --history exports/history.json --aliases exports/aliases.json --csv vault.csv
    python vault_export.py --league-id abc123 --detect-names
"""

import argparse
import logging
import sys
from pathlib import Path

from clutch_vault import (
    APIError,
    ClutchAPIClient,
    compute_vault_stats,
    detect_names,
    flatten_team_entries,
    format_year_ranges,
    owner_stats_frame,
    vault_stats_to_dict,
)
from clutch_vault.history import name_to_years, unique_raw_names
from clutch_vault.logging_config import parse_level, setup_logging
from clutch_vault.schemas import LeagueHistory, OwnerAlias, OwnerAliasesResponse
from clutch_vault.utils import load_json, save_json
from clutch_vault.validators import validate_team_records


def load_aliases_file(path: Path) -> list[OwnerAlias]:
    """Load aliases saved either as a bare list or as {"aliases": [...]}."""
    data = load_json(path)
    if isinstance(data, list):
        data = {'aliases': data}
    return OwnerAliasesResponse.model_validate(data).aliases


def main():
    parser = argparse.ArgumentParser(description="Export all-time League Vault rankings")
    parser.add_argument(
        "--league-id", "-l",
        default=None,
        help="League to fetch from the API (not needed with --history)",
    )
    parser.add_argument(
        "--history",
        default=None,
        help="Local JSON export of /imports/history/{leagueId}",
    )
    parser.add_argument(
        "--aliases",
        default=None,
        help="Local JSON export of the league's owner aliases",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for vault JSON (defaults to vault_{league}.json)",
    )
    parser.add_argument(
        "--csv",
        default=None,
        help="Also write the rankings table as CSV",
    )
    parser.add_argument(
        "--detect-names",
        action="store_true",
        help="List team names that look like real people",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write a log file to this directory",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: CLUTCH_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    level = None
    if args.quiet:
        level = logging.WARNING
    elif args.log_level:
        level = parse_level(args.log_level)

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=level,
        log_to_file=bool(args.log_dir),
    )

    if not args.history and not args.league_id:
        print("❌ Provide --league-id or --history")
        sys.exit(1)

    try:
        if args.history:
            history = load_json(args.history, schema=LeagueHistory)
            aliases = load_aliases_file(Path(args.aliases)) if args.aliases else []
        else:
            with ClutchAPIClient.from_config() as client:
                history = client.get_league_history(args.league_id)
                aliases = client.get_owner_aliases(args.league_id)
    except APIError as e:
        print(f"❌ API request failed: {e}")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Could not read input: {e}")
        sys.exit(1)

    league_id = args.league_id or history.league_id or "league"
    records = flatten_team_entries(history)

    if not args.quiet:
        for warning in validate_team_records(records):
            print(f"⚠️  {warning}")

    if args.detect_names:
        aliased = {a.owner_name for a in aliases}
        candidates = detect_names(
            [n for n in unique_raw_names(records) if n not in aliased],
            name_to_years(records),
        )
        print(f"\nPossible owner names ({len(candidates)}):")
        for candidate in candidates:
            print(f"  {candidate.name}  [{candidate.matched_word}]  {format_year_ranges(candidate.seasons)}")

    stats = compute_vault_stats(records, aliases)

    if not args.quiet:
        print("\n" + "=" * 60)
        print("ALL-TIME RANKINGS")
        print("=" * 60)
        for rank, owner in enumerate(stats.owner_stats, 1):
            live = "  (live)" if owner.current_season else ""
            titles = f"  {owner.titles}x champ" if owner.titles else ""
            print(
                f"  {rank}. {owner.name}: {owner.total_wins}-{owner.total_losses} "
                f"({owner.win_pct:.3f}){titles}{live}"
            )

        league = stats.league_stats
        print(
            f"\n{league.total_seasons} seasons, {league.total_owners} owners, "
            f"{league.total_games} games, {league.total_points} points, {league.total_titles} titles"
        )

    output_path = Path(args.output) if args.output else Path(f"vault_{league_id}.json")
    save_json(output_path, vault_stats_to_dict(stats))
    print(f"Vault saved: {output_path}")

    if args.csv:
        owner_stats_frame(stats).write_csv(args.csv)
        print(f"Rankings saved: {args.csv}")


if __name__ == "__main__":
    main()
