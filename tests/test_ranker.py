"""Day ranking tests"""

from datetime import date

import pytest

from wodboard.scoring.ranker import (
    build_competitors,
    build_day_board,
    day_status,
    group_teams,
    placement_for,
    position_for,
    rank,
    rank_all,
)
from wodboard.scoring.schemas import DayStatus, Discipline

DAY = date(2024, 3, 4)


def band_ids(bands):
    return [(band.position, set(band.athlete_ids)) for band in bands]


class TestRankTime:
    def test_tie_skips_next_position(self, make_score):
        """Two tied for first put the next band on position 3"""
        records = [
            make_score("a", DAY, seconds=120),
            make_score("b", DAY, seconds=120),
            make_score("c", DAY, seconds=150),
        ]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"a", "b"}), (3, {"c"})]

    def test_lower_time_wins(self, make_score):
        records = [make_score("slow", DAY, seconds=700), make_score("fast", DAY, seconds=500)]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"fast"}), (2, {"slow"})]

    def test_missing_time_sorts_last(self, make_score):
        records = [make_score("none", DAY), make_score("timed", DAY, seconds=900)]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"timed"}), (2, {"none"})]

    def test_only_three_bands(self, make_score):
        records = [make_score(f"a{i}", DAY, seconds=100 + i) for i in range(5)]
        assert len(rank(records, Discipline.TIME)) == 3
        assert [band.position for band in rank_all(records, Discipline.TIME)] == [1, 2, 3, 4, 5]

    def test_third_band_may_start_beyond_third_position(self, make_score):
        records = [
            make_score("a", DAY, seconds=100),
            make_score("b", DAY, seconds=100),
            make_score("c", DAY, seconds=100),
            make_score("d", DAY, seconds=110),
            make_score("e", DAY, seconds=120),
        ]
        assert [band.position for band in rank(records, Discipline.TIME)] == [1, 4, 5]


class TestRankAmrap:
    def test_rounds_dominate_reps(self, make_score):
        records = [
            make_score("a", DAY, rounds=5, reps=12),
            make_score("b", DAY, rounds=5, reps=20),
            make_score("c", DAY, rounds=6, reps=0),
        ]
        assert band_ids(rank(records, Discipline.AMRAP)) == [
            (1, {"c"}),
            (2, {"b"}),
            (3, {"a"}),
        ]

    def test_tie_needs_rounds_and_reps(self, make_score):
        records = [
            make_score("a", DAY, rounds=5, reps=12),
            make_score("b", DAY, rounds=5, reps=12),
            make_score("c", DAY, rounds=5, reps=11),
        ]
        assert band_ids(rank(records, Discipline.AMRAP)) == [(1, {"a", "b"}), (3, {"c"})]

    def test_missing_values_sort_last(self, make_score):
        records = [make_score("empty", DAY), make_score("zero", DAY, rounds=0, reps=0)]
        assert band_ids(rank(records, Discipline.AMRAP)) == [(1, {"zero"}), (2, {"empty"})]

    def test_calories_higher_wins(self, make_score):
        records = [
            make_score("a", DAY, rounds=0, reps=150),
            make_score("b", DAY, rounds=0, reps=180),
        ]
        assert band_ids(rank(records, Discipline.CALORIES)) == [(1, {"b"}), (2, {"a"})]


class TestRankEdgeCases:
    @pytest.mark.parametrize("discipline", [Discipline.NO_SCORE, Discipline.UNKNOWN])
    def test_unscored_disciplines(self, make_score, discipline):
        assert rank([make_score("a", DAY, seconds=100)], discipline) == []

    def test_empty_input(self):
        assert rank([], Discipline.TIME) == []

    def test_single_record(self, make_score):
        bands = rank([make_score("a", DAY, seconds=300)], Discipline.TIME)
        assert band_ids(bands) == [(1, {"a"})]

    def test_guests_are_not_ranked(self, make_score):
        records = [
            make_score(None, DAY, seconds=100, guest_name="Visitor"),
            make_score("a", DAY, seconds=200),
        ]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"a"})]

    def test_first_submission_wins_for_duplicates(self, make_score):
        records = [make_score("a", DAY, seconds=600), make_score("a", DAY, seconds=500)]
        bands = rank(records, Discipline.TIME)
        assert len(bands) == 1
        assert bands[0].competitors[0].record.elapsed_seconds == 600


class TestTeams:
    def test_team_expands_to_members(self, make_score):
        """A winning pair pushes the next athlete to position 3"""
        records = [
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score("b", DAY, seconds=500, team_id="t1"),
            make_score("c", DAY, seconds=550),
        ]
        bands = rank(records, Discipline.TIME)
        assert band_ids(bands) == [(1, {"a", "b"}), (3, {"c"})]
        assert bands[0].competitors[0].is_team

    def test_team_tied_with_solo_advances_by_members(self, make_score):
        records = [
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score("b", DAY, seconds=500, team_id="t1"),
            make_score("c", DAY, seconds=500),
            make_score("d", DAY, seconds=600),
            make_score("e", DAY, seconds=700),
        ]
        bands = rank(records, Discipline.TIME)
        assert band_ids(bands) == [(1, {"a", "b", "c"}), (4, {"d"}), (5, {"e"})]
        assert bands[0].entry_count == 3

    def test_repeated_member_counts_once(self, make_score):
        records = [
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score("b", DAY, seconds=500, team_id="t1"),
            make_score("c", DAY, seconds=550),
        ]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"a", "b"}), (3, {"c"})]

    def test_team_guests_count_as_one_entry(self, make_score):
        records = [
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score(None, DAY, seconds=500, team_id="t1", guest_name="Zed"),
            make_score(None, DAY, seconds=500, team_id="t1", guest_name="Yan"),
            make_score("c", DAY, seconds=550),
        ]
        assert band_ids(rank(records, Discipline.TIME)) == [(1, {"a"}), (3, {"c"})]

    def test_group_teams_collects_members_and_guests(self, make_score):
        records = [
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score("b", DAY, seconds=500, team_id="t1"),
            make_score("a", DAY, seconds=500, team_id="t1"),
            make_score(None, DAY, seconds=500, team_id="t1", guest_name="Zed"),
        ]
        team = group_teams(records)["t1"]
        assert team.member_ids == ("a", "b")
        assert team.guest_names == ("Zed",)
        assert team.has_guests
        assert team.record == records[0]

    def test_guest_only_team_takes_a_position(self, make_score):
        records = [
            make_score(None, DAY, seconds=100, team_id="t9", guest_name="X"),
            make_score(None, DAY, seconds=100, team_id="t9", guest_name="Y"),
            make_score("a", DAY, seconds=200),
        ]
        assert [c.athlete_ids for c in build_competitors(records)] == [(), ("a",)]

        bands = rank(records, Discipline.TIME)
        assert band_ids(bands) == [(1, set()), (2, {"a"})]
        assert position_for("a", records, Discipline.TIME) == 2


class TestPlacement:
    def test_medal_positions(self, make_score):
        records = [
            make_score("a", DAY, seconds=100),
            make_score("b", DAY, seconds=100),
            make_score("c", DAY, seconds=120),
        ]
        assert placement_for("b", records, Discipline.TIME) == 1
        assert placement_for("c", records, Discipline.TIME) == 3

    def test_outside_medals_counts_better_competitors(self, make_score):
        records = [make_score(f"a{i}", DAY, seconds=100 + i) for i in range(6)]
        assert placement_for("a5", records, Discipline.TIME) == 6

    def test_clamped_at_ten(self, make_score):
        records = [make_score(f"a{i}", DAY, seconds=100 + i) for i in range(12)]
        assert position_for("a11", records, Discipline.TIME) == 12
        assert placement_for("a11", records, Discipline.TIME) == 10

    def test_absent_athlete(self, make_score):
        records = [make_score("a", DAY, seconds=100)]
        assert placement_for("zz", records, Discipline.TIME) is None


class TestDayBoard:
    def test_status_distinguishes_empty_days(self, make_workout, make_score):
        timed = make_workout(DAY)
        emom = make_workout(DAY, "EMOM 10")
        record = make_score("a", DAY, seconds=100)

        assert day_status(None, []) == DayStatus.NO_WORKOUT
        assert day_status(emom, [record]) == DayStatus.NOT_SCOREABLE
        assert day_status(timed, []) == DayStatus.NO_SUBMISSIONS
        assert day_status(timed, [record]) == DayStatus.RANKED

    def test_rows_include_guests_in_result_order(self, make_workout, make_score):
        records = [
            make_score("slow", DAY, seconds=700),
            make_score(None, DAY, seconds=500, guest_name="Visitor"),
            make_score("fast", DAY, seconds=400),
        ]
        board = build_day_board(DAY, make_workout(DAY), records)

        assert board.status == DayStatus.RANKED
        assert board.discipline == Discipline.TIME
        assert [row.record.elapsed_seconds for row in board.rows] == [400, 500, 700]
        assert [row.position for row in board.rows] == [1, None, 2]
        assert band_ids(board.bands) == [(1, {"fast"}), (2, {"slow"})]

    def test_guest_team_rows_share_their_position(self, make_workout, make_score):
        records = [
            make_score("a", DAY, seconds=200),
            make_score(None, DAY, seconds=100, team_id="t9", guest_name="X"),
            make_score(None, DAY, seconds=100, team_id="t9", guest_name="Y"),
        ]
        board = build_day_board(DAY, make_workout(DAY), records)

        assert [row.position for row in board.rows] == [1, 1, 2]
        assert [band.position for band in board.bands] == [1, 2]

    def test_unscored_day_keeps_submission_order(self, make_workout, make_score):
        records = [make_score("b", DAY), make_score("a", DAY)]
        board = build_day_board(DAY, make_workout(DAY, "Strength: deadlift"), records)

        assert board.status == DayStatus.NOT_SCOREABLE
        assert board.bands == []
        assert [row.record.athlete_id for row in board.rows] == ["b", "a"]
        assert all(row.position is None for row in board.rows)

    def test_no_workout(self):
        board = build_day_board(DAY, None, [])
        assert board.status == DayStatus.NO_WORKOUT
        assert board.discipline == Discipline.UNKNOWN
