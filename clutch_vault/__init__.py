from .models import (
    TeamSeasonRecord,
    Owner,
    OwnerStat,
    LeagueStat,
    VaultStats,
    NameCandidate,
)
from .schemas import OwnerAlias, LeagueHistory, HistoricalSeason
from .name_detector import detect_names
from .history import flatten_team_entries
from .api_client import APIError, ClutchAPIClient
from .ratings import fetch_clutch_ratings
from .assignment import OwnerAssignmentSession
from .vault_stats import (
    compute_vault_stats,
    load_vault_stats,
    vault_stats_to_dict,
    owner_stats_frame,
)
from .utils import format_year_ranges

__all__ = [
    # Models
    'TeamSeasonRecord',
    'Owner',
    'OwnerStat',
    'LeagueStat',
    'VaultStats',
    'NameCandidate',
    # Wire schemas
    'OwnerAlias',
    'LeagueHistory',
    'HistoricalSeason',
    # Reconciliation
    'detect_names',
    'flatten_team_entries',
    'OwnerAssignmentSession',
    # Aggregation
    'compute_vault_stats',
    'load_vault_stats',
    'vault_stats_to_dict',
    'owner_stats_frame',
    # API
    'APIError',
    'ClutchAPIClient',
    'fetch_clutch_ratings',
    # Formatting
    'format_year_ranges',
]
