"""
Tests for report persistence and admin edits with audit.

Rules covered:
1. A report is keyed by (director, month); saving twice updates in place
2. A supplied non-empty collection replaces every stored row; only named
   entries are kept
3. Omitted or empty collections are left alone
4. Singleton sub-fields that are omitted keep their stored value; '' and 0
   overwrite
5. Admin edits write one audit entry per edit that changes something
"""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from salesreports.errors import NotFoundError, StorageError, ValidationFailure
from salesreports.models import (
    Report,
    Win,
    RepFirm,
    GoodJob,
    RegionalPerformance,
    KeyInitiatives,
    MarketTrends,
    FollowUp,
    ReportEditHistory,
)
from salesreports.schemas import ReportEditPayload, ReportPayload
from salesreports.services import report_persistence
from salesreports.services.report_persistence import (
    add_photo,
    get_or_create_draft,
    update_report_with_audit,
    upsert_report,
)
from salesreports.services.report_queries import fetch_full_report


def save(db, director, **fields):
    data = {"directorId": director.id, "month": "2025-03"}
    data.update(fields)
    return upsert_report(db, ReportPayload.model_validate(data))


def edit(db, report_id, **fields):
    return update_report_with_audit(db, report_id, ReportEditPayload.model_validate(fields))


def history(db, report_id):
    return db.query(ReportEditHistory).filter(ReportEditHistory.report_id == report_id).all()


PERFORMANCE = {
    "monthlySales": 50000,
    "monthlyGoal": 40000,
    "ytdSales": 0,
    "ytdGoal": 0,
    "openOrders": 0,
    "pipeline": 0,
}


class TestUpsertReport:
    """Tests for the director save/submit path."""

    def test_first_save_creates_draft(self, db, director):
        """A new (director, month) creates a draft report."""
        report = save(db, director, executiveSummary="Strong month")

        assert report.status == "draft"
        assert report.executive_summary == "Strong month"
        assert db.query(Report).count() == 1

    def test_second_save_updates_same_row(self, db, director):
        """Saving the same (director, month) again never creates a second report."""
        first = save(db, director, executiveSummary="v1")
        second = save(db, director, executiveSummary="v2", status="submitted")

        assert first.id == second.id
        assert db.query(Report).count() == 1
        assert second.executive_summary == "v2"
        assert second.status == "submitted"

    def test_status_kept_when_not_supplied(self, db, director):
        """Saving without a status does not revert a submitted report to draft."""
        save(db, director, status="submitted")
        report = save(db, director, executiveSummary="late fix")

        assert report.status == "submitted"

    def test_executive_summary_kept_when_omitted(self, db, director):
        """Omitting executiveSummary on update keeps the stored text."""
        save(db, director, executiveSummary="keep me")
        report = save(db, director, followUps="call Acme")

        assert report.executive_summary == "keep me"

    def test_idempotent(self, db, director):
        """The same payload twice gives identical content and no duplicate rows."""
        payload = {
            "wins": [{"title": "Closed Acme", "description": "big"}],
            "repFirms": [{"name": "Rep Co", "monthlySales": 1000}],
            "goodJobs": [{"personName": "Lee", "reason": "demo"}],
            "regionalPerformance": PERFORMANCE,
            "marketTrends": "Prices up",
        }
        report = save(db, director, **payload)
        first = fetch_full_report(db, report.id)

        save(db, director, **payload)
        second = fetch_full_report(db, report.id)

        assert db.query(Win).count() == 1
        assert db.query(RepFirm).count() == 1
        assert db.query(GoodJob).count() == 1
        assert db.query(RegionalPerformance).count() == 1
        assert [w["title"] for w in first["wins"]] == [w["title"] for w in second["wins"]]
        assert first["regionalPerformance"]["monthly_sales"] == second["regionalPerformance"]["monthly_sales"]
        assert first["marketTrends"] == second["marketTrends"] == "Prices up"

    def test_missing_director_rejected(self, db):
        """Director and month are required before anything is written."""
        with pytest.raises(ValidationFailure):
            upsert_report(db, ReportPayload.model_validate({"month": "2025-03"}))
        assert db.query(Report).count() == 0

    def test_bad_month_rejected(self, db, director):
        with pytest.raises(ValidationFailure):
            save(db, director, month="March 2025")

    def test_storage_failure_rolls_back_everything(self, db, director, monkeypatch):
        """A failing child write leaves no parent row behind."""
        def boom(*args, **kwargs):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(report_persistence, "apply_sections", boom)

        with pytest.raises(StorageError):
            save(db, director, wins=[{"title": "A"}])

        assert db.query(Report).count() == 0


class TestCollections:
    """Tests for collection replacement."""

    def test_collection_replaced_not_appended(self, db, director):
        """Submitting wins [A] then [B] leaves exactly one win, B."""
        save(db, director, wins=[{"title": "A"}])
        save(db, director, wins=[{"title": "B"}])

        titles = [w.title for w in db.query(Win).all()]
        assert titles == ["B"]

    def test_unnamed_entries_dropped(self, db, director):
        """Entries without a title are not stored."""
        save(db, director, wins=[
            {"title": "", "description": "x"},
            {"title": "B", "description": "y"},
        ])

        wins = db.query(Win).all()
        assert len(wins) == 1
        assert wins[0].title == "B"
        assert wins[0].description == "y"

    def test_empty_collection_leaves_rows(self, db, director):
        """An empty list is treated like an omitted collection."""
        save(db, director, wins=[{"title": "A"}])
        save(db, director, wins=[])

        assert [w.title for w in db.query(Win).all()] == ["A"]

    def test_omitted_collection_leaves_rows(self, db, director):
        save(db, director, wins=[{"title": "A"}])
        save(db, director, executiveSummary="no wins sent")

        assert db.query(Win).count() == 1

    def test_submitted_order_preserved(self, db, director):
        """Rows come back in the order they were submitted."""
        report = save(db, director, repFirms=[
            {"name": "Zeta Reps"},
            {"name": "Alpha Reps"},
            {"name": "Mid Reps", "entityType": "customer"},
        ])

        data = fetch_full_report(db, report.id)
        assert [r["name"] for r in data["repFirms"]] == ["Zeta Reps", "Alpha Reps", "Mid Reps"]
        assert data["repFirms"][2]["entity_type"] == "customer"
        assert data["repFirms"][0]["entity_type"] == "rep_firm"

    def test_collections_scoped_to_report(self, db, director, other_director):
        """Replacing one report's wins never touches another report."""
        save(db, other_director, wins=[{"title": "Theirs"}])
        save(db, director, wins=[{"title": "Mine"}])
        save(db, director, wins=[{"title": "Mine v2"}])

        assert sorted(w.title for w in db.query(Win).all()) == ["Mine v2", "Theirs"]


class TestSingletons:
    """Tests for singleton upserts."""

    def test_empty_string_overwrites(self, db, director):
        """marketTrends '' clears a stored value."""
        save(db, director, marketTrends="Prices rising")
        save(db, director, marketTrends="")

        assert db.query(MarketTrends).one().observations == ""

    def test_omitted_keeps_value(self, db, director):
        """Omitting marketTrends leaves the stored value as it was."""
        save(db, director, marketTrends="Prices rising")
        save(db, director, executiveSummary="other edit")

        assert db.query(MarketTrends).one().observations == "Prices rising"

    def test_industry_info_independent_of_trends(self, db, director):
        """Trends and industry info share a row but are sent separately."""
        save(db, director, marketTrends="Prices rising", industryInfo="Trade show in May")
        save(db, director, industryInfo="Show moved to June")

        row = db.query(MarketTrends).one()
        assert row.observations == "Prices rising"
        assert row.industry_info == "Show moved to June"

    def test_partial_initiatives_keep_other_fields(self, db, director):
        """Only the initiative fields that were sent change."""
        save(db, director, keyInitiatives={"keyProjects": "Stadium", "challengesBlockers": "Supply"})
        save(db, director, keyInitiatives={"keyProjects": "Arena"})

        row = db.query(KeyInitiatives).one()
        assert row.key_projects == "Arena"
        assert row.challenges_blockers == "Supply"

    def test_performance_missing_figures_become_zero(self, db, director):
        """Regional performance is written as a whole; unsent figures are 0."""
        save(db, director, regionalPerformance=PERFORMANCE)
        save(db, director, regionalPerformance={"monthlySales": 70000})

        row = db.query(RegionalPerformance).one()
        assert row.monthly_sales == 70000
        assert row.monthly_goal == 0

    def test_formatted_numbers_parsed(self, db, director):
        """Figures typed with separators are stored as numbers."""
        save(db, director, regionalPerformance={"monthlySales": "$1,250,000", "pipeline": ""})

        row = db.query(RegionalPerformance).one()
        assert row.monthly_sales == 1250000
        assert row.pipeline == 0

    def test_follow_ups_upserted(self, db, director):
        save(db, director, followUps="Call Acme")
        save(db, director, followUps="Call Acme and Beta")

        assert db.query(FollowUp).one().content == "Call Acme and Beta"


class TestUpdateWithAudit:
    """Tests for administrator edits."""

    def test_unknown_report(self, db):
        with pytest.raises(NotFoundError):
            edit(db, "missing-id", executiveSummary="x")

    def test_single_scalar_change(self, db, director):
        """Changing only the summary records exactly that field."""
        report = save(db, director, executiveSummary="foo")

        changed = edit(db, report.id, executiveSummary="bar")

        assert changed == 1
        entry = history(db, report.id)[0]
        assert entry.changes == {"executive_summary": {"old": "foo", "new": "bar"}}

    def test_performance_fields_independent(self, db, director):
        """Changing only monthlyGoal records one entry, not six."""
        report = save(db, director, regionalPerformance=PERFORMANCE)

        changed = edit(db, report.id, regionalPerformance={**PERFORMANCE, "monthlyGoal": 45000})

        assert changed == 1
        assert list(history(db, report.id)[0].changes) == ["regional_performance.monthlyGoal"]

    def test_no_op_edit_writes_nothing(self, db, director):
        """An edit identical to stored state records no audit entry."""
        full = {
            "executiveSummary": "Solid",
            "wins": [{"title": "Closed Acme", "description": "big"}],
            "repFirms": [{"name": "Rep Co", "monthlySales": 1000, "ytdSales": 5000,
                          "percentToGoal": 80, "yoyGrowth": 5}],
            "competitors": [{"name": "Rival", "whatWereSeeing": "discounts", "ourResponse": "value"}],
            "regionalPerformance": PERFORMANCE,
            "keyInitiatives": {"keyProjects": "Stadium", "distributionUpdates": "", "challengesBlockers": ""},
            "marketingEvents": {"eventsAttended": "Expo", "marketingCampaigns": ""},
            "marketTrends": "Prices up",
            "followUps": "Call Acme",
        }
        report = save(db, director, **full)

        changed = edit(db, report.id, **full)

        assert changed == 0
        assert history(db, report.id) == []

    def test_omitted_sections_are_not_changes(self, db, director):
        """An edit that only sends performance does not flag stored wins."""
        report = save(db, director, wins=[{"title": "Closed Acme"}], marketTrends="Prices up")

        changed = edit(db, report.id, regionalPerformance=PERFORMANCE)

        changes = history(db, report.id)[0].changes
        assert "wins" not in changes
        assert "market_trends" not in changes
        assert changed == 2  # monthlySales and monthlyGoal went from 0

    def test_collection_change_recorded_as_counts(self, db, director):
        """Wins are summarized by count of named entries."""
        report = save(db, director, wins=[{"title": "A"}, {"title": "B"}, {"title": "C"}])

        edit(db, report.id, wins=[{"title": "A"}, {"title": "B"}, {"title": "C"}, {"title": "D"}])

        assert history(db, report.id)[0].changes == {"wins": {"old": "3 wins", "new": "4 wins"}}

    def test_edit_applies_changes(self, db, director):
        """The edit is written, not only audited."""
        report = save(db, director, wins=[{"title": "A"}], goodJobs=[{"personName": "Lee"}])

        edit(db, report.id, wins=[{"title": "A2"}], goodJobs=[{"personName": "Kim"}], industryInfo="New")

        data = fetch_full_report(db, report.id)
        assert [w["title"] for w in data["wins"]] == ["A2"]
        assert [g["person_name"] for g in data["goodJobs"]] == ["Kim"]
        assert data["industryInfo"] == "New"

    def test_edit_reason_and_actor(self, db, director):
        report = save(db, director, executiveSummary="foo")

        edit(db, report.id, executiveSummary="bar", editReason="typo")

        entry = history(db, report.id)[0]
        assert entry.edit_reason == "typo"
        assert entry.edited_by == "admin"

    def test_each_edit_appends(self, db, director):
        """History is append-only: two changing edits give two entries."""
        report = save(db, director, executiveSummary="v1")

        edit(db, report.id, executiveSummary="v2")
        edit(db, report.id, executiveSummary="v3")

        assert len(history(db, report.id)) == 2

    def test_unnamed_entry_in_edit_is_a_change(self, db, director):
        """Sent rows are compared as sent, blank ones included."""
        report = save(db, director, wins=[{"title": "B", "description": "y"}])

        changed = edit(db, report.id, wins=[
            {"title": "", "description": "x"},
            {"title": "B", "description": "y"},
        ])

        assert changed == 1
        assert history(db, report.id)[0].changes == {"wins": {"old": "1 wins", "new": "1 wins"}}
        assert [(w.title, w.description) for w in db.query(Win).all()] == [("B", "y")]

    def test_sub_cent_figures_repeat_without_changes(self, db, director):
        """Figures beyond cents are rounded on the way in, so repeating them changes nothing."""
        figures = {
            "repFirms": [{"name": "Rep Co", "monthlySales": 1000.006, "ytdSales": 5000.004,
                          "percentToGoal": 80.125, "yoyGrowth": 12.344}],
            "regionalPerformance": {**PERFORMANCE, "pipeline": 2500.009},
        }
        report = save(db, director, **figures)

        edit(db, report.id, **figures)
        changed = edit(db, report.id, **figures)

        assert changed == 0
        assert history(db, report.id) == []

    def test_read_failure_is_storage_error(self, db, director, monkeypatch):
        """Loading the stored report happens inside the same failure handling as the write."""
        report = save(db, director, executiveSummary="foo")

        def boom(*args, **kwargs):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(report_persistence, "load_sections", boom)

        with pytest.raises(StorageError):
            edit(db, report.id, executiveSummary="bar")

        monkeypatch.undo()
        assert history(db, report.id) == []
        assert db.query(Report).one().executive_summary == "foo"


class TestFigures:
    """Numeric figures are stored at cent precision."""

    def test_rounded_to_cents(self, db, director):
        save(db, director, repFirms=[{"name": "Rep Co", "monthlySales": 1000.006, "yoyGrowth": 12.344}])

        row = db.query(RepFirm).one()
        assert row.monthly_sales == 1000.01
        assert row.yoy_growth == 12.34

    def test_large_percentages(self, db, director):
        """Percent to goal is not capped below six digits."""
        save(db, director, repFirms=[{"name": "Rep Co", "percentToGoal": 150000, "yoyGrowth": -250000.5}])

        row = db.query(RepFirm).one()
        assert row.percent_to_goal == 150000
        assert row.yoy_growth == -250000.5


class TestEndToEnd:
    """Director submits, admin corrects a figure."""

    def test_submit_then_correct(self, db, director):
        report = save(
            db,
            director,
            status="draft",
            wins=[{"title": "Closed Acme"}],
            regionalPerformance=PERFORMANCE,
        )

        assert report.status == "draft"
        assert [w.title for w in db.query(Win).filter(Win.report_id == report.id)] == ["Closed Acme"]
        perf = db.query(RegionalPerformance).filter(RegionalPerformance.report_id == report.id).one()
        assert perf.monthly_sales == 50000
        assert perf.monthly_goal == 40000

        changed = edit(
            db,
            report.id,
            wins=[{"title": "Closed Acme"}],
            regionalPerformance={**PERFORMANCE, "monthlySales": 60000},
            editReason="corrected figure",
        )

        assert changed == 1
        entries = history(db, report.id)
        assert len(entries) == 1
        assert entries[0].changes == {
            "regional_performance.monthlySales": {"old": 50000, "new": 60000}
        }
        assert entries[0].edit_reason == "corrected figure"


class TestPhotos:
    """Photos hang off a report and are never touched by saves."""

    def test_draft_created_for_upload(self, db, director):
        report = get_or_create_draft(db, director.id, "2025-04")

        assert report.status == "draft"
        assert report.executive_summary == ""
        assert get_or_create_draft(db, director.id, "2025-04").id == report.id

    def test_save_keeps_photos(self, db, director):
        report = get_or_create_draft(db, director.id, "2025-03")
        add_photo(db, report.id, "booth.jpg", "/uploads/x/1.jpg")

        save(db, director, wins=[{"title": "A"}])

        assert [p["filename"] for p in fetch_full_report(db, report.id)["photos"]] == ["booth.jpg"]
