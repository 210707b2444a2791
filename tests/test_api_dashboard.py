"""Tests for the /dashboard endpoints."""

from datetime import date, timedelta

import pytest

from app.models.deadline import Deadline
from app.models.exam import Exam

TODAY = date(2026, 10, 19)


@pytest.fixture
def seeded(db, monkeypatch):
    monkeypatch.setattr("app.api.v1.endpoints.dashboard.get_local_today", lambda: TODAY)
    db.add_all([
        Exam(name="Anatomia umana", cfu=9, status="passed", grade=27, date=date(2026, 1, 20)),
        Exam(name="Statistica", cfu=6, status="passed", grade=30, date=date(2026, 2, 10)),
        Exam(name="Fisiologia", cfu=9, status="planned", date=TODAY + timedelta(days=3)),
        Exam(name="Igiene", cfu=9, status="failed", date=date(2026, 6, 1)),
        Deadline(title="Prima rata", due_date=TODAY - timedelta(days=2), is_completed=False),
        Deadline(title="Seconda rata", due_date=TODAY + timedelta(days=12), is_completed=False),
        Deadline(title="Immatricolazione", due_date=date(2026, 9, 1), is_completed=True),
    ])
    db.commit()
    return db


class TestDashboard:
    """Tests for GET /api/v1/dashboard/."""

    def test_real_stats(self, client, seeded):
        data = client.get("/api/v1/dashboard/").json()
        assert data["stats"]["average"] == 28.2
        assert data["stats"]["cfu_progress"] == 15
        assert data["stats"]["total_cfu"] == 180
        assert data["stats"]["simulated"] is False

    def test_next_items(self, client, seeded):
        data = client.get("/api/v1/dashboard/").json()
        assert data["next_exam"]["title"] == "Fisiologia"
        assert data["next_exam"]["days_remaining"] == 3
        assert data["next_deadline"]["title"] == "Seconda rata"
        assert data["next_deadline"]["urgency"] == "warning"

    def test_lists(self, client, seeded):
        data = client.get("/api/v1/dashboard/").json()
        assert [g["label"] for g in data["planned_by_month"]] == ["Ottobre 2026"]
        assert [e["name"] for e in data["history"]] == ["Igiene", "Statistica", "Anatomia umana"]
        assert [(d["title"], d["state"]) for d in data["deadlines"]] == [
            ("Prima rata", "late"),
            ("Seconda rata", "pending"),
            ("Immatricolazione", "paid"),
        ]


class TestSimulate:
    """Tests for POST /api/v1/dashboard/simulate."""

    def test_simulation_merges_without_saving(self, client, seeded):
        planned = seeded.query(Exam).filter(Exam.status == "planned").one()

        response = client.post("/api/v1/dashboard/simulate", json={"grades": {str(planned.id): 28}})

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["average"] == 28.13
        assert stats["cfu_progress"] == 24
        assert stats["simulated"] is True

        seeded.refresh(planned)
        assert planned.status == "planned"
        assert planned.grade is None
        assert client.get("/api/v1/dashboard/").json()["stats"]["average"] == 28.2

    def test_invalid_simulated_grade(self, client, seeded):
        response = client.post("/api/v1/dashboard/simulate", json={"grades": {"1": 45}})
        assert response.status_code == 422
