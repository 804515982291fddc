"""Tests for history flattening and name detection."""

import pytest

from clutch_vault.history import (
    available_years,
    flatten_team_entries,
    group_by_raw_name,
    latest_season_entries,
    name_to_years,
    unique_raw_names,
)
from clutch_vault.name_detector import detect_names, match_first_name, split_name_tokens
from clutch_vault.schemas import LeagueHistory


SEASONS = {
    '2020': [
        {'id': 11, 'ownerName': 'Alice', 'teamName': 'Tyrants', 'wins': 8, 'losses': 6},
        {'ownerName': '', 'teamName': 'Bombers', 'wins': '7', 'losses': '7'},
    ],
    '2022': [
        {'ownerName': 'Alice', 'teamName': 'Tyrants II', 'wins': 10, 'losses': 4,
         'playoffResult': 'champion'},
    ],
    '2021': [
        {'ownerName': None, 'teamName': None, 'wins': 3, 'losses': 11},
        {'teamName': 'Bombers', 'wins': 'abc', 'losses': None, 'pointsFor': 'NaN'},
    ],
}


class TestFlattenTeamEntries:
    """Tests for turning the seasons map into records."""

    def test_sorted_newest_first(self):
        """Test records come out by season year descending."""
        entries = flatten_team_entries(SEASONS)
        assert [e.season_year for e in entries] == [2022, 2021, 2020, 2020]

    def test_within_year_order_kept(self):
        """Test rows in the same season keep their input order."""
        entries = flatten_team_entries(SEASONS)
        assert [e.raw_name for e in entries if e.season_year == 2020] == ['Alice', 'Bombers']

    def test_owner_name_preferred(self):
        """Test raw name is the owner name, falling back to the team name."""
        entries = flatten_team_entries(SEASONS)
        assert entries[0].raw_name == 'Alice'
        assert entries[0].team_name == 'Tyrants II'
        assert entries[1].raw_name == 'Bombers'

    def test_blank_rows_skipped(self):
        """Test rows with neither owner nor team name are dropped."""
        entries = flatten_team_entries(SEASONS)
        assert len(entries) == 4
        assert all(e.raw_name for e in entries)

    def test_dirty_numbers_are_zero(self):
        """Test unparseable stats count as zero."""
        bombers_2021 = flatten_team_entries(SEASONS)[1]
        assert bombers_2021.wins == 0
        assert bombers_2021.losses == 0
        assert bombers_2021.points_for == 0.0

    def test_numeric_strings(self):
        bombers_2020 = flatten_team_entries(SEASONS)[3]
        assert bombers_2020.wins == 7
        assert bombers_2020.losses == 7

    def test_id_is_string(self):
        entries = flatten_team_entries(SEASONS)
        assert entries[2].id == '11'
        assert entries[3].id is None

    def test_accepts_response_and_model(self):
        """Test the full response and a LeagueHistory flatten identically."""
        expected = flatten_team_entries(SEASONS)
        assert flatten_team_entries({'leagueId': 'lg1', 'seasons': SEASONS}) == expected
        assert flatten_team_entries(LeagueHistory.model_validate({'seasons': SEASONS})) == expected

    def test_empty_inputs(self):
        assert flatten_team_entries(None) == []
        assert flatten_team_entries({}) == []

    def test_bad_years_and_values_skipped(self):
        """Test unreadable year keys and non-list seasons are ignored."""
        entries = flatten_team_entries({
            'unknown': [{'teamName': 'Ghosts'}],
            '2019': None,
            '2018': [{'teamName': 'Real'}, 'not a row'],
        })
        assert [(e.raw_name, e.season_year) for e in entries] == [('Real', 2018)]

    def test_history_model_with_junk_rows(self):
        """Test a validated history keeps junk rows for the flattener to skip."""
        history = LeagueHistory.model_validate({
            'seasons': {'2020': [42, {'id': 7.5, 'ownerName': 'Alice', 'wins': 2}]},
        })
        entries = flatten_team_entries(history)
        assert [(e.raw_name, e.id, e.wins) for e in entries] == [('Alice', '7.5', 2)]

    def test_history_model_rejects_non_object_seasons(self):
        with pytest.raises(ValueError, match='keyed by season year'):
            LeagueHistory.model_validate({'seasons': [{'teamName': 'Tyrants'}]})


class TestIndexes:
    """Tests for raw name indexes built from records."""

    def test_unique_raw_names(self):
        """Test first-seen order over newest-first records."""
        assert unique_raw_names(flatten_team_entries(SEASONS)) == ['Alice', 'Bombers']

    def test_group_by_raw_name(self):
        groups = group_by_raw_name(flatten_team_entries(SEASONS))
        assert [e.season_year for e in groups['Bombers']] == [2021, 2020]

    def test_name_to_years(self):
        """Test years are distinct and ascending."""
        years = name_to_years(flatten_team_entries(SEASONS))
        assert years == {'Alice': [2020, 2022], 'Bombers': [2020, 2021]}

    def test_available_years(self):
        assert available_years(flatten_team_entries(SEASONS)) == [2022, 2021, 2020]

    def test_latest_season_entries(self):
        latest = latest_season_entries(flatten_team_entries(SEASONS))
        assert [e.raw_name for e in latest] == ['Alice']
        assert latest_season_entries([]) == []


class TestNameDetector:
    """Tests for first-name detection in raw names."""

    def test_split_tokens(self):
        assert split_name_tokens(' mike_the.commish-2@home ') == ['mike', 'the', 'commish', '2', 'home']

    def test_match_keeps_case(self):
        """Test the matched token is returned as written."""
        assert match_first_name('Team JENNIFER') == 'JENNIFER'
        assert match_first_name('mike_the_commish') == 'mike'

    def test_no_match(self):
        assert match_first_name('Gridiron Gang') is None
        assert match_first_name('') is None

    def test_first_matching_token_wins(self):
        assert match_first_name('sarah.and.mike') == 'sarah'

    def test_detect_names(self):
        """Test candidates are sorted by name and carry their seasons."""
        candidates = detect_names(
            ['Team Alice', 'Gridiron Gang', 'sarah attack'],
            {'Team Alice': [2019, 2020]},
        )
        assert [(c.name, c.matched_word) for c in candidates] == [
            ('sarah attack', 'sarah'),
            ('Team Alice', 'Alice'),
        ]
        assert candidates[0].seasons == []
        assert candidates[1].seasons == [2019, 2020]

    def test_custom_dictionary(self):
        """Test a caller-supplied dictionary replaces the built-in one."""
        candidates = detect_names(['Gridiron Gang', 'Team Alice'], dictionary=frozenset({'gridiron'}))
        assert [c.matched_word for c in candidates] == ['Gridiron']
