# tests/services/test_ratings.py
"""Tests for the rating ledger and its averaging rule."""

import pytest
from sqlalchemy import select

from wikireview.core.errors import ValidationError
from wikireview.models import Rating
from wikireview.services.ratings import RatingLedger, round_average


@pytest.fixture()
def ledger(db_session) -> RatingLedger:
    return RatingLedger(db_session)


class TestRoundAverage:
    @pytest.mark.parametrize(
        ("total", "count", "expected"),
        [
            (12, 3, 4.0),
            (5, 1, 5.0),
            (0, 0, 0.0),
            (13, 4, 3.3),
            (5, 3, 1.7),
            (9, 2, 4.5),
        ],
    )
    def test_half_up_to_one_decimal(self, total, count, expected) -> None:
        assert round_average(total, count) == expected


class TestSubmitRating:
    def test_average_of_several_raters(self, ledger) -> None:
        for voter, value in [("a", 4), ("b", 5), ("c", 3)]:
            summary = ledger.submit_rating(7, "Page", value, voter)

        assert (summary.average, summary.count, summary.user_rating) == (4.0, 3, 3)

    def test_resubmission_overwrites(self, ledger, db_session) -> None:
        ledger.submit_rating(7, "Page", 5, "alice")
        summary = ledger.submit_rating(7, "Page", 2, "alice")

        rows = db_session.scalars(select(Rating).where(Rating.subject_id == 7)).all()
        assert [row.value for row in rows] == [2]
        assert (summary.average, summary.count, summary.user_rating) == (2.0, 1, 2)

    def test_anonymous_raters_share_one_slot(self, ledger) -> None:
        ledger.submit_rating(7, "Page", 1)
        summary = ledger.submit_rating(7, "Page", 4, None)

        assert (summary.count, summary.user_rating) == (1, 4)
        assert ledger.get_rating_summary(7, "Anonymous").user_rating == 4

    def test_default_label(self, ledger, db_session) -> None:
        ledger.submit_rating(8, None, 3, "alice")
        assert db_session.scalars(select(Rating.subject_label)).one() == "Page 8"

    @pytest.mark.parametrize("value", [0, 6, -1, 3.5, "4", True, None])
    def test_rejects_invalid_values(self, ledger, db_session, value) -> None:
        with pytest.raises(ValidationError):
            ledger.submit_rating(7, "Page", value, "alice")
        assert db_session.scalars(select(Rating)).all() == []


def test_summary_for_unrated_page(ledger) -> None:
    summary = ledger.get_rating_summary(404, "alice")
    assert (summary.average, summary.count, summary.user_rating) == (0.0, 0, None)


def test_insert_race_updates_existing_row(ledger, db_session, monkeypatch, caplog) -> None:
    ledger.submit_rating(7, "Page", 5, "alice")

    # A concurrent request wrote alice's row after this request looked for it.
    lookup = ledger._get_rating
    misses = [None]

    def stale_lookup(subject_id, voter):
        return misses.pop() if misses else lookup(subject_id, voter)

    monkeypatch.setattr(ledger, "_get_rating", stale_lookup)

    with caplog.at_level("WARNING", logger="wikireview.services.ratings"):
        summary = ledger.submit_rating(7, "Page", 2, "alice")

    assert (summary.average, summary.count, summary.user_rating) == (2.0, 1, 2)
    rows = db_session.scalars(select(Rating).where(Rating.subject_id == 7)).all()
    assert [row.value for row in rows] == [2]
    assert "Rating race" in caplog.text
