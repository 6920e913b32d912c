import pytest

from app.core.exceptions import InterviewerNotFoundError, SlotOverlapError
from app.models.interviewer import Interviewer
from app.models.slot import Slot, SlotStatus
from app.services.slot_generator import SlotGenerator, tile_window

HOUR_MS = 3_600_000


def _window(start, end):
    return {"start_time": start, "end_time": end}


def _stored_slots(db_session, interviewer_id):
    return sorted(
        db_session.query(Slot).filter(Slot.interviewer_id == interviewer_id).all(),
        key=lambda s: s.start_time,
    )


class TestTileWindow:
    def test_exact_fit(self):
        assert tile_window(0, 3 * HOUR_MS, HOUR_MS) == [
            (0, HOUR_MS),
            (HOUR_MS, 2 * HOUR_MS),
            (2 * HOUR_MS, 3 * HOUR_MS),
        ]

    @pytest.mark.parametrize("length, expected", [
        (HOUR_MS - 1, 0),
        (HOUR_MS, 1),
        (HOUR_MS + 1, 1),
        (int(2.5 * HOUR_MS), 2),
        (8 * HOUR_MS, 8),
    ])
    def test_count_is_floor_of_length(self, length, expected):
        start = 1_700_000_000_000
        bounds = tile_window(start, start + length, HOUR_MS)
        assert len(bounds) == expected
        for slot_start, slot_end in bounds:
            assert start <= slot_start < slot_end <= start + length
            assert slot_end - slot_start == HOUR_MS

    def test_contiguous_without_gaps(self):
        bounds = tile_window(500, 500 + 5 * HOUR_MS + 42, HOUR_MS)
        for (_, prev_end), (next_start, _) in zip(bounds, bounds[1:]):
            assert prev_end == next_start

    def test_inverted_window_yields_nothing(self):
        assert tile_window(10 * HOUR_MS, 5 * HOUR_MS, HOUR_MS) == []

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            tile_window(0, HOUR_MS, 0)


def test_generates_hourly_slots(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    slots = SlotGenerator(db_session).generate_slots(
        interviewer.id, [_window(monday_9am, monday_9am + 3 * HOUR_MS)]
    )

    assert len(slots) == 3
    stored = _stored_slots(db_session, interviewer.id)
    assert [s.start_time for s in stored] == [monday_9am + i * HOUR_MS for i in range(3)]
    assert all(s.end_time - s.start_time == HOUR_MS for s in stored)
    assert all(s.status == SlotStatus.AVAILABLE for s in stored)
    assert all(s.candidate_name is None for s in stored)
    assert all(s.version == 1 for s in stored)


def test_remainder_is_discarded(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    SlotGenerator(db_session).generate_slots(
        interviewer.id, [_window(monday_9am, monday_9am + 2 * HOUR_MS + 30 * 60_000)]
    )
    stored = _stored_slots(db_session, interviewer.id)
    assert len(stored) == 2
    assert stored[-1].end_time == monday_9am + 2 * HOUR_MS


def test_availability_is_replaced_not_merged(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    generator = SlotGenerator(db_session)
    generator.generate_slots(interviewer.id, [_window(monday_9am, monday_9am + HOUR_MS)])
    second = [_window(monday_9am + 24 * HOUR_MS, monday_9am + 26 * HOUR_MS)]
    generator.generate_slots(interviewer.id, second)

    db_session.expire_all()
    refreshed = db_session.get(Interviewer, interviewer.id)
    assert refreshed.availability == second
    # Earlier slots are kept; slots are never deleted
    assert len(_stored_slots(db_session, interviewer.id)) == 3


def test_empty_availability_clears_windows(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    generator = SlotGenerator(db_session)
    generator.generate_slots(interviewer.id, [_window(monday_9am, monday_9am + HOUR_MS)])

    assert generator.generate_slots(interviewer.id, []) == []
    assert generator.generate_slots(interviewer.id, None) == []

    db_session.expire_all()
    assert db_session.get(Interviewer, interviewer.id).availability == []
    assert len(_stored_slots(db_session, interviewer.id)) == 1


def test_resubmission_duplicates_slots(db_session, make_interviewer, monday_9am):
    """Same windows twice -> two independent full sets; no dedup by default."""
    interviewer = make_interviewer()
    windows = [_window(monday_9am, monday_9am + 3 * HOUR_MS)]
    generator = SlotGenerator(db_session)
    generator.generate_slots(interviewer.id, windows)
    generator.generate_slots(interviewer.id, windows)

    stored = _stored_slots(db_session, interviewer.id)
    assert len(stored) == 6
    assert len({s.id for s in stored}) == 6


def test_overlapping_windows_are_not_checked(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    SlotGenerator(db_session).generate_slots(interviewer.id, [
        _window(monday_9am, monday_9am + 2 * HOUR_MS),
        _window(monday_9am + 30 * 60_000, monday_9am + 90 * 60_000),
    ])
    assert len(_stored_slots(db_session, interviewer.id)) == 3


def test_unknown_interviewer(db_session, monday_9am):
    with pytest.raises(InterviewerNotFoundError):
        SlotGenerator(db_session).generate_slots("missing", [_window(monday_9am, monday_9am + HOUR_MS)])
    assert db_session.query(Slot).count() == 0


def test_custom_duration(db_session, make_interviewer, monday_9am):
    interviewer = make_interviewer()
    slots = SlotGenerator(db_session, slot_duration_minutes=30).generate_slots(
        interviewer.id, [_window(monday_9am, monday_9am + HOUR_MS + 45 * 60_000)]
    )
    assert len(slots) == 3
    assert all(s.end_time - s.start_time == 30 * 60_000 for s in slots)


def test_unknown_overlap_policy(db_session):
    with pytest.raises(ValueError):
        SlotGenerator(db_session, overlap_policy="merge")


class TestRejectOverlapPolicy:
    def test_resubmission_rejected_and_nothing_persisted(self, db_session, make_interviewer, monday_9am):
        interviewer = make_interviewer()
        generator = SlotGenerator(db_session, overlap_policy="reject")
        first = [_window(monday_9am, monday_9am + 2 * HOUR_MS)]
        generator.generate_slots(interviewer.id, first)

        with pytest.raises(SlotOverlapError):
            generator.generate_slots(interviewer.id, [_window(monday_9am + HOUR_MS, monday_9am + 3 * HOUR_MS)])

        db_session.expire_all()
        assert db_session.get(Interviewer, interviewer.id).availability == first
        assert len(_stored_slots(db_session, interviewer.id)) == 2

    def test_overlap_inside_one_submission(self, db_session, make_interviewer, monday_9am):
        interviewer = make_interviewer()
        with pytest.raises(SlotOverlapError):
            SlotGenerator(db_session, overlap_policy="reject").generate_slots(interviewer.id, [
                _window(monday_9am, monday_9am + 2 * HOUR_MS),
                _window(monday_9am + HOUR_MS, monday_9am + 2 * HOUR_MS),
            ])
        assert _stored_slots(db_session, interviewer.id) == []

    def test_adjacent_windows_allowed(self, db_session, make_interviewer, monday_9am):
        interviewer = make_interviewer()
        generator = SlotGenerator(db_session, overlap_policy="reject")
        generator.generate_slots(interviewer.id, [_window(monday_9am, monday_9am + HOUR_MS)])
        generator.generate_slots(interviewer.id, [_window(monday_9am + HOUR_MS, monday_9am + 2 * HOUR_MS)])
        assert len(_stored_slots(db_session, interviewer.id)) == 2

    def test_other_interviewers_do_not_conflict(self, db_session, make_interviewer, monday_9am):
        ada = make_interviewer()
        grace = make_interviewer(name="Grace Hopper", email="grace@example.com")
        generator = SlotGenerator(db_session, overlap_policy="reject")
        windows = [_window(monday_9am, monday_9am + HOUR_MS)]
        generator.generate_slots(ada.id, windows)
        generator.generate_slots(grace.id, windows)
        assert db_session.query(Slot).count() == 2
