"""Tests for the statistics and simulation engine."""

from datetime import date, timedelta

import pytest

from app.models.deadline import Deadline
from app.models.exam import Exam
from app.services import stats

TODAY = date(2026, 10, 19)


def make_exam(exam_id, cfu, status, grade=None, when=None, name=None):
    return Exam(
        id=exam_id,
        name=name or f"Esame {exam_id}",
        cfu=cfu,
        grade=grade,
        status=status,
        date=when,
    )


@pytest.fixture
def career():
    """Two passed exams and one planned (9 CFU)."""
    return [
        make_exam(1, 9, "passed", grade=27, when=date(2026, 1, 20)),
        make_exam(2, 6, "passed", grade=30, when=date(2026, 2, 10)),
        make_exam(3, 9, "planned", when=date(2026, 11, 5)),
    ]


class TestWeightedAverage:
    """Tests for compute_stats without simulation."""

    def test_average_and_projection(self, career):
        """(9*27 + 6*30) / 15 = 28.2, projection 28.2 * 110 / 30 = 103.4."""
        result = stats.compute_stats(career)
        assert result.average == 28.2
        assert result.projection == 103.4
        assert result.cfu_progress == 15
        assert result.total_cfu == 180
        assert result.simulated is False

    def test_no_passed_exams_gives_zero(self):
        """No active exam means average 0, no division by zero."""
        exams = [
            make_exam(1, 9, "planned"),
            make_exam(2, 6, "failed"),
        ]
        result = stats.compute_stats(exams)
        assert result.average == 0
        assert result.projection == 0
        assert result.cfu_progress == 0

    def test_passed_without_grade_is_ignored(self):
        """A passed exam with no grade stays out of the active set."""
        exams = [
            make_exam(1, 9, "passed", grade=None),
            make_exam(2, 6, "passed", grade=24),
        ]
        result = stats.compute_stats(exams)
        assert result.average == 24.0
        assert result.cfu_progress == 6

    def test_projection_is_not_clamped(self):
        """31 (lode) everywhere projects above 110."""
        exams = [make_exam(1, 6, "passed", grade=31)]
        result = stats.compute_stats(exams)
        assert result.projection == 113.7

    def test_custom_cfu_target(self, career):
        result = stats.compute_stats(career, total_cfu=120)
        assert result.total_cfu == 120


class TestSimulation:
    """Tests for GradeSimulation merged into compute_stats."""

    def test_simulated_grade_is_merged(self, career):
        """Planned 9 CFU with 28: (243 + 180 + 252) / 24 = 28.125, half-up to 28.13."""
        simulation = stats.GradeSimulation({3: 28})
        result = stats.compute_stats(career, simulation)
        assert result.average == 28.13
        assert result.projection == 103.1
        assert result.cfu_progress == 24
        assert result.simulated is True

    def test_simulation_does_not_mutate_records(self, career):
        simulation = stats.GradeSimulation({3: 28})
        stats.compute_stats(career, simulation)
        planned = career[2]
        assert planned.status == "planned"
        assert planned.grade is None

    def test_disable_discards_grades(self, career):
        simulation = stats.GradeSimulation({3: 28})
        simulation.disable()
        assert simulation.grades == {}
        result = stats.compute_stats(career, simulation)
        assert result.average == 28.2
        assert result.simulated is False

    def test_simulated_grade_ignored_for_passed_exam(self, career):
        """Only planned exams take hypothetical grades."""
        simulation = stats.GradeSimulation({1: 18})
        result = stats.compute_stats(career, simulation)
        assert result.average == 28.2

    def test_clearing_a_grade(self, career):
        simulation = stats.GradeSimulation({3: 28})
        simulation.set_grade(3, None)
        assert stats.compute_stats(career, simulation).average == 28.2

    def test_out_of_range_grade_rejected(self):
        simulation = stats.GradeSimulation()
        with pytest.raises(ValueError):
            simulation.set_grade(3, 40)


class TestNextUpcoming:
    """Tests for next_upcoming_exam / next_upcoming_deadline."""

    def test_today_wins(self):
        exams = [
            make_exam(1, 6, "planned", when=TODAY + timedelta(days=10), name="Dieci"),
            make_exam(2, 6, "planned", when=TODAY + timedelta(days=1), name="Domani"),
            make_exam(3, 6, "planned", when=TODAY, name="Oggi"),
        ]
        upcoming = stats.next_upcoming_exam(exams, TODAY)
        assert upcoming.title == "Oggi"
        assert upcoming.days_remaining == 0
        assert upcoming.kind == "exam"
        assert upcoming.urgency == "urgent"

    def test_yesterday_excluded(self):
        exams = [
            make_exam(1, 6, "planned", when=TODAY - timedelta(days=1), name="Ieri"),
            make_exam(2, 6, "planned", when=TODAY + timedelta(days=20), name="Dopo"),
        ]
        upcoming = stats.next_upcoming_exam(exams, TODAY)
        assert upcoming.title == "Dopo"
        assert upcoming.days_remaining == 20
        assert upcoming.urgency == "approaching"

    def test_only_planned_dated_exams(self):
        exams = [
            make_exam(1, 6, "passed", grade=30, when=TODAY + timedelta(days=2)),
            make_exam(2, 6, "planned", when=None),
        ]
        assert stats.next_upcoming_exam(exams, TODAY) is None

    def test_next_deadline_skips_completed(self):
        deadlines = [
            Deadline(id=1, title="Prima rata", due_date=TODAY + timedelta(days=3), is_completed=True),
            Deadline(id=2, title="Seconda rata", due_date=TODAY + timedelta(days=40), is_completed=False),
        ]
        upcoming = stats.next_upcoming_deadline(deadlines, TODAY)
        assert upcoming.title == "Seconda rata"
        assert upcoming.kind == "deadline"
        assert upcoming.urgency == "safe"

    @pytest.mark.parametrize("days,expected", [
        (0, "urgent"), (7, "urgent"), (8, "warning"), (15, "warning"),
        (16, "approaching"), (30, "approaching"), (31, "safe"),
    ])
    def test_urgency_levels(self, days, expected):
        assert stats.urgency_for(days) == expected


class TestGrouping:
    """Tests for the planned/history lists."""

    def test_planned_grouped_by_month(self):
        exams = [
            make_exam(1, 6, "planned", when=date(2026, 12, 3)),
            make_exam(2, 6, "planned", when=None),
            make_exam(3, 6, "planned", when=date(2026, 11, 20)),
            make_exam(4, 6, "planned", when=date(2026, 11, 5)),
            make_exam(5, 6, "passed", grade=30, when=date(2026, 11, 1)),
        ]
        groups = stats.group_planned_by_month(exams)
        assert list(groups) == ["Novembre 2026", "Dicembre 2026", "Data da definire"]
        assert [e.id for e in groups["Novembre 2026"]] == [4, 3]
        assert [e.id for e in groups["Data da definire"]] == [2]

    def test_history_descending_undated_last(self):
        exams = [
            make_exam(1, 6, "passed", grade=25, when=date(2025, 6, 1)),
            make_exam(2, 6, "failed", when=None),
            make_exam(3, 6, "failed", when=date(2026, 2, 1)),
            make_exam(4, 6, "planned", when=date(2026, 3, 1)),
        ]
        assert [e.id for e in stats.history(exams)] == [3, 1, 2]
