"""
Tests for the consolidated month/quarter roll-up.
"""

import pytest

from salesreports.errors import ValidationFailure
from salesreports.schemas import ReportPayload
from salesreports.services.consolidated import (
    get_consolidated_data,
    months_for_period,
    percent_to_goal,
)
from salesreports.services.report_persistence import upsert_report


def save(db, director, month, **fields):
    data = {"directorId": director.id, "month": month}
    data.update(fields)
    return upsert_report(db, ReportPayload.model_validate(data))


class TestPeriods:
    @pytest.mark.parametrize("quarter,months", [
        ("2025-Q1", ["2025-01", "2025-02", "2025-03"]),
        ("2025-Q4", ["2025-10", "2025-11", "2025-12"]),
    ])
    def test_quarter_months(self, quarter, months):
        assert months_for_period("quarter", quarter) == months

    def test_month(self):
        assert months_for_period("month", "2025-03") == ["2025-03"]

    def test_invalid(self):
        with pytest.raises(ValidationFailure):
            months_for_period("quarter", "2025-Q7")


class TestPercentToGoal:
    def test_rounds(self):
        assert percent_to_goal(50000, 40000) == 125
        assert percent_to_goal(1, 3) == 33

    def test_no_goal(self):
        assert percent_to_goal(50000, 0) == 0


class TestConsolidatedData:
    """Totals, per-report rows and highlights."""

    def test_empty_month(self, db, director):
        data = get_consolidated_data(db, "month", "2025-03")

        assert data["month"] == "2025-03"
        assert data["totalDirectors"] == 1
        assert data["totalReports"] == 0
        assert data["submittedReports"] == 0
        assert data["totalMonthlySales"] == 0
        assert data["regions"] == []
        assert data["topWins"] == []

    def test_totals_and_rows(self, db, director, other_director):
        save(
            db, director, "2025-03",
            status="submitted",
            regionalPerformance={"monthlySales": 50000, "monthlyGoal": 40000, "pipeline": 1000},
            wins=[{"title": "Acme PO"}, {"title": "Beta renewal"}],
        )
        save(
            db, other_director, "2025-03",
            regionalPerformance={"monthlySales": 10000, "monthlyGoal": 20000, "openOrders": 500},
        )

        data = get_consolidated_data(db, "month", "2025-03")

        assert data["totalDirectors"] == 2
        assert data["totalReports"] == 2
        assert data["submittedReports"] == 1
        assert data["totalMonthlySales"] == 60000
        assert data["totalMonthlyGoal"] == 60000
        assert data["totalPipeline"] == 1000
        assert data["totalOpenOrders"] == 500

        rows = {row["director"]: row for row in data["regions"]}
        assert rows["Dana Reyes"]["region"] == "West"
        assert rows["Dana Reyes"]["percentToGoal"] == 125
        assert rows["Dana Reyes"]["topWin"] == "Acme PO"
        assert rows["Dana Reyes"]["status"] == "submitted"
        assert rows["Sam Patel"]["region"] == "East"
        assert rows["Sam Patel"]["percentToGoal"] == 50
        assert rows["Sam Patel"]["topWin"] == ""

    def test_report_without_performance(self, db, director):
        save(db, director, "2025-03", executiveSummary="Draft only")

        row = get_consolidated_data(db, "month", "2025-03")["regions"][0]

        assert row["monthlySales"] == 0
        assert row["percentToGoal"] == 0

    def test_quarter(self, db, director):
        for month, sales in (("2025-01", 100), ("2025-02", 200), ("2025-04", 400)):
            save(db, director, month, regionalPerformance={"monthlySales": sales})

        data = get_consolidated_data(db, "quarter", "2025-Q1")

        assert "month" not in data
        assert data["months"] == ["2025-01", "2025-02", "2025-03"]
        assert data["totalReports"] == 2
        assert data["totalMonthlySales"] == 300
        assert [row["month"] for row in data["regions"]] == ["2025-01", "2025-02"]

    def test_highlights_limited_to_five(self, db, director):
        save(db, director, "2025-01", wins=[{"title": f"Jan {i}"} for i in range(4)])
        save(db, director, "2025-02", wins=[{"title": f"Feb {i}"} for i in range(4)])

        data = get_consolidated_data(db, "quarter", "2025-Q1")

        assert data["topWins"] == [
            "West: Jan 0", "West: Jan 1", "West: Jan 2", "West: Jan 3", "West: Feb 0",
        ]

    def test_themes_and_initiatives(self, db, director):
        save(
            db, director, "2025-03",
            competitors=[
                {"name": "Rival", "whatWereSeeing": "Price cuts"},
                {"name": "Quiet Co"},
            ],
            keyInitiatives={"keyProjects": "Showroom", "distributionUpdates": "New warehouse"},
        )

        data = get_consolidated_data(db, "month", "2025-03")

        assert data["competitiveThemes"] == ["Rival - Price cuts"]
        assert data["keyInitiatives"] == ["Showroom", "New warehouse"]


class TestConsolidatedApi:
    """GET /api/consolidated"""

    def test_month(self, client, director):
        client.post("/api/reports", json={
            "directorId": director.id,
            "month": "2025-03",
            "status": "submitted",
        })

        data = client.get("/api/consolidated", params={"month": "2025-03"}).json()

        assert data["submittedReports"] == 1
        assert data["regions"][0]["director"] == "Dana Reyes"

    def test_bad_quarter(self, client):
        response = client.get("/api/consolidated", params={"quarter": "2025-Q9"})

        assert response.status_code == 400
        assert response.json() == {"error": "Quarter periods must be in YYYY-Qn format"}
