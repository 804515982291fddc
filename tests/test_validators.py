"""Unit tests for validation functions."""

from clutch_vault.models import TeamSeasonRecord
from clutch_vault.schemas import OwnerAlias
from clutch_vault.validators import (
    validate_alias_list,
    validate_team_record,
    validate_team_records,
)


class TestAliasValidation:
    """Tests for alias batch validation."""

    def test_valid_aliases(self):
        """Test that a clean batch passes all checks."""
        aliases = [
            OwnerAlias(owner_name='Tyrants', canonical_name='Alice'),
            OwnerAlias(owner_name='Alice', canonical_name='Alice'),
            OwnerAlias(owner_name='Gone', canonical_name='Gone', is_active=False),
        ]
        assert validate_alias_list(aliases) == []

    def test_blank_names(self):
        """Test that blank raw or canonical names are flagged."""
        aliases = [
            OwnerAlias(owner_name='  ', canonical_name='Alice'),
            OwnerAlias(owner_name='Tyrants', canonical_name=''),
        ]
        errors = validate_alias_list(aliases)
        assert len(errors) == 2
        assert 'blank team name' in errors[0]
        assert 'blank owner name' in errors[1]

    def test_conflicting_aliases(self):
        """Test that one raw name mapped to two owners is flagged once."""
        aliases = [
            OwnerAlias(owner_name='Tyrants', canonical_name='Alice'),
            OwnerAlias(owner_name='Tyrants', canonical_name='Bob'),
            OwnerAlias(owner_name='Tyrants', canonical_name='Carol'),
        ]
        errors = validate_alias_list(aliases)
        assert errors == ['Team names mapped to more than one owner: Tyrants']

    def test_repeated_identical_alias(self):
        """Test that a duplicated identical alias is not a conflict."""
        aliases = [
            OwnerAlias(owner_name='Tyrants', canonical_name='Alice'),
            OwnerAlias(owner_name='Tyrants', canonical_name='Alice'),
        ]
        assert validate_alias_list(aliases) == []


class TestTeamRecordValidation:
    """Tests for imported team-season validation."""

    def test_valid_record(self):
        record = TeamSeasonRecord(raw_name='Tyrants', season_year=2021, wins=9, losses=5,
                                  playoff_result='champion')
        assert validate_team_record(record) == []

    def test_negative_stats(self):
        """Test that negative stats are flagged individually."""
        record = TeamSeasonRecord(raw_name='Tyrants', season_year=2021, wins=-1, points_against=-5.0)
        warnings = validate_team_record(record)
        assert len(warnings) == 2
        assert any('negative wins' in w for w in warnings)
        assert any('negative points_against' in w for w in warnings)

    def test_missing_year(self):
        record = TeamSeasonRecord(raw_name='Tyrants', season_year=0)
        assert validate_team_record(record) == ['Tyrants has no season year']

    def test_unknown_playoff_result(self):
        record = TeamSeasonRecord(raw_name='Tyrants', season_year=2021, playoff_result='semifinal')
        warnings = validate_team_record(record)
        assert len(warnings) == 1
        assert "'semifinal'" in warnings[0]

    def test_multiple_champions(self):
        """Test that a season with two champions is flagged."""
        records = [
            TeamSeasonRecord(raw_name='Tyrants', season_year=2021, playoff_result='champion'),
            TeamSeasonRecord(raw_name='Bombers', season_year=2021, playoff_result='champion'),
            TeamSeasonRecord(raw_name='Tyrants', season_year=2020, playoff_result='champion'),
        ]
        warnings = validate_team_records(records)
        assert warnings == ['2021 has 2 champions: Tyrants, Bombers']

    def test_clean_history(self):
        records = [
            TeamSeasonRecord(raw_name='Tyrants', season_year=2021, wins=9, losses=5, playoff_result='runner_up'),
            TeamSeasonRecord(raw_name='Bombers', season_year=2021, wins=5, losses=9),
        ]
        assert validate_team_records(records) == []
