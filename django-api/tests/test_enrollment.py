"""Unit tests for the capacity and waiting list state machine.

Run with: pytest tests/test_enrollment.py -v
"""

import random
from datetime import date

import pytest

from activities.domain import enrollment
from activities.domain.enrollment import EnrollmentStatus, age_on, enrollment_status, meets_age_limit
from activities.domain.errors import CapacityError, ConflictError, EligibilityError, ErrorCode, NotFoundError
from fakes import TODAY, build_activity, build_member


class PickLast:
    """Stand-in RNG that always draws the last index."""

    def randrange(self, stop: int) -> int:
        return stop - 1


class TestAge:
    """Tests for age computation and the age limit."""

    def test_age_before_birthday(self):
        assert age_on(date(2000, 3, 11), TODAY) == 25

    def test_age_on_birthday(self):
        assert age_on(date(2000, 3, 10), TODAY) == 26

    def test_zero_limit_admits_everyone(self):
        activity = build_activity(build_member("alice"), age_limit=0)
        assert meets_age_limit(activity, build_member("old", birth_date=date(1940, 1, 1)), TODAY)
        assert meets_age_limit(activity, build_member("young", birth_date=date(2015, 1, 1)), TODAY)

    def test_limit_admits_only_younger_members(self):
        activity = build_activity(build_member("alice"), age_limit=18)
        seventeen = build_member("teen", birth_date=date(2008, 6, 1))
        eighteen = build_member("adult", birth_date=date(2008, 3, 10))
        assert meets_age_limit(activity, seventeen, TODAY)
        assert not meets_age_limit(activity, eighteen, TODAY)


class TestEnroll:
    """Tests for enroll."""

    def test_joins_as_participant_while_places_free(self):
        activity = build_activity(build_member("alice"), num_places=1)
        bob = build_member("bob")
        assert enrollment.enroll(activity, bob, TODAY) is EnrollmentStatus.PARTICIPANT
        assert activity.participants == [bob]

    def test_joins_waiting_list_when_full(self):
        activity = build_activity(build_member("alice"), num_places=1)
        enrollment.enroll(activity, build_member("bob"), TODAY)
        carol = build_member("carol")
        assert enrollment.enroll(activity, carol, TODAY) is EnrollmentStatus.WAITLISTED
        assert activity.waiting_list == [carol]

    def test_waiting_list_keeps_join_order(self):
        activity = build_activity(build_member("alice"), num_places=1)
        members = [build_member(name) for name in ("bob", "carol", "dave")]
        for member in members:
            enrollment.enroll(activity, member, TODAY)
        assert activity.waiting_list == members[1:]

    def test_participant_cannot_enroll_twice(self):
        activity = build_activity(build_member("alice"))
        bob = build_member("bob")
        enrollment.enroll(activity, bob, TODAY)
        with pytest.raises(ConflictError) as exc_info:
            enrollment.enroll(activity, bob, TODAY)
        assert exc_info.value.code is ErrorCode.ALREADY_PARTICIPANT
        assert len(activity.participants) == 1

    def test_waitlisted_member_cannot_enroll_twice(self):
        activity = build_activity(build_member("alice"), num_places=1)
        enrollment.enroll(activity, build_member("bob"), TODAY)
        carol = build_member("carol")
        enrollment.enroll(activity, carol, TODAY)
        with pytest.raises(ConflictError) as exc_info:
            enrollment.enroll(activity, carol, TODAY)
        assert exc_info.value.code is ErrorCode.ALREADY_WAITLISTED
        assert len(activity.waiting_list) == 1

    def test_age_limit_rejects_before_any_change(self):
        activity = build_activity(build_member("alice"), age_limit=18)
        with pytest.raises(EligibilityError):
            enrollment.enroll(activity, build_member("adult", birth_date=date(1980, 1, 1)), TODAY)
        assert activity.participants == []
        assert activity.waiting_list == []

    def test_status_lookup(self):
        activity = build_activity(build_member("alice"), num_places=1)
        bob, carol, dave = build_member("bob"), build_member("carol"), build_member("dave")
        enrollment.enroll(activity, bob, TODAY)
        enrollment.enroll(activity, carol, TODAY)
        assert enrollment_status(activity, bob.id) is EnrollmentStatus.PARTICIPANT
        assert enrollment_status(activity, carol.id) is EnrollmentStatus.WAITLISTED
        assert enrollment_status(activity, dave.id) is EnrollmentStatus.NOT_ENROLLED


class TestPromoteFromWaitlist:
    """Tests for promote_from_waitlist."""

    def test_full_activity_raises_capacity_error(self):
        activity = build_activity(build_member("alice"), num_places=1)
        enrollment.enroll(activity, build_member("bob"), TODAY)
        enrollment.enroll(activity, build_member("carol"), TODAY)
        with pytest.raises(CapacityError):
            enrollment.promote_from_waitlist(activity, random.Random(1))
        assert len(activity.waiting_list) == 1

    def test_empty_waiting_list_returns_none(self):
        activity = build_activity(build_member("alice"), num_places=2)
        assert enrollment.promote_from_waitlist(activity, random.Random(1)) is None

    def test_moves_drawn_member_to_participants(self):
        carol, dave = build_member("carol"), build_member("dave")
        activity = build_activity(build_member("alice"), num_places=2, waiting_list=[carol, dave])
        promoted = enrollment.promote_from_waitlist(activity, PickLast())
        assert promoted == dave
        assert activity.participants == [dave]
        assert activity.waiting_list == [carol]

    def test_draw_is_reproducible_with_seed(self):
        waiting = [build_member(f"m{i}") for i in range(5)]
        first = build_activity(build_member("alice"), num_places=5, waiting_list=list(waiting))
        second = build_activity(build_member("alice"), num_places=5, waiting_list=list(waiting))
        assert enrollment.promote_from_waitlist(first, random.Random(42)) == enrollment.promote_from_waitlist(
            second, random.Random(42)
        )


class TestRemoveParticipant:
    """Tests for remove_participant."""

    def test_removes_participant(self):
        bob = build_member("bob")
        activity = build_activity(build_member("alice"), participants=[bob])
        assert enrollment.remove_participant(activity, bob.id) == bob
        assert activity.participants == []

    def test_does_not_promote_waiting_members(self):
        bob, carol = build_member("bob"), build_member("carol")
        activity = build_activity(build_member("alice"), num_places=1, participants=[bob], waiting_list=[carol])
        enrollment.remove_participant(activity, bob.id)
        assert activity.waiting_list == [carol]

    def test_non_participant_raises(self):
        carol = build_member("carol")
        activity = build_activity(build_member("alice"), waiting_list=[carol])
        with pytest.raises(NotFoundError) as exc_info:
            enrollment.remove_participant(activity, carol.id)
        assert exc_info.value.code is ErrorCode.NOT_A_PARTICIPANT


class TestCapacityInvariant:
    """Participants never exceed num_places under any operation sequence."""

    def test_random_operation_sequence(self):
        rng = random.Random(2026)
        activity = build_activity(build_member("alice"), num_places=3)
        pool = [build_member(f"m{i}") for i in range(12)]
        for _ in range(300):
            op = rng.choice(["enroll", "promote", "remove"])
            try:
                if op == "enroll":
                    enrollment.enroll(activity, rng.choice(pool), TODAY)
                elif op == "promote":
                    enrollment.promote_from_waitlist(activity, rng)
                elif activity.participants:
                    enrollment.remove_participant(activity, rng.choice(activity.participants).id)
            except (ConflictError, NotFoundError):
                pass
            assert len(activity.participants) <= activity.num_places
            participant_ids = {m.id for m in activity.participants}
            assert participant_ids.isdisjoint(m.id for m in activity.waiting_list)
