"""Unit tests for MembershipAggregate."""

from datetime import UTC, datetime

from membership.domain.aggregates import MembershipAggregate
from membership.domain.events import (
    CustomerBecameBoardMember,
    CustomerCreated,
    CustomerDeleted,
    CustomerImported,
    CustomerRemovedFromBoard,
    MembershipActivated,
    MembershipDeactivated,
    SubscriptionCreated,
    SubscriptionImported,
    SubscriptionUpdated,
    UserMembershipCreated,
    WaiverAssignedToCustomer,
)
from membership.domain.value_objects import BOARD_CAPABILITY, CustomerProfile

CUSTOMER_ID = 42
WHEN = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _types(events) -> list[str]:
    return [type(event).__name__ for event in events]


def _jane(**overrides) -> CustomerProfile:
    fields = {
        "username": "jdoe",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "Jane@X.com",
        "slack_id": "U123",
        "capabilities": (),
        "card_numbers": ("123",),
    }
    fields.update(overrides)
    return CustomerProfile(**fields)


class TestActivation:
    """Tests for the activation rule."""

    def test_need_id_check_to_active_activates_once(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.create_subscription(7, "need-id-check", WHEN)
        aggregate.update_subscription(7, "active", WHEN)

        events = aggregate.collect_events()
        assert _types(events) == [
            "SubscriptionCreated",
            "SubscriptionUpdated",
            "MembershipActivated",
        ]
        assert events[-1] == MembershipActivated(
            customer_id=CUSTOMER_ID, occurred_at=WHEN
        )

    def test_duplicate_active_records_no_derived_event(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(7, "need-id-check", WHEN)
        aggregate.update_subscription(7, "active", WHEN)
        aggregate.collect_events()

        aggregate.update_subscription(7, "active", WHEN)

        assert _types(aggregate.collect_events()) == ["SubscriptionUpdated"]

    def test_first_sighting_as_active_activates(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.import_subscription(7, "active", WHEN)

        assert _types(aggregate.collect_events()) == [
            "SubscriptionImported",
            "MembershipActivated",
        ]

    def test_id_was_checked_to_active_activates(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(7, "id-was-checked", WHEN)

        aggregate.update_subscription(7, "active", WHEN)

        assert "MembershipActivated" in _types(aggregate.collect_events())

    def test_reactivation_from_cancelled_does_not_activate(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(7, "active", WHEN)
        aggregate.update_subscription(7, "cancelled", WHEN)
        aggregate.collect_events()

        aggregate.update_subscription(7, "active", WHEN)

        assert _types(aggregate.collect_events()) == ["SubscriptionUpdated"]
        assert aggregate.is_member is True

    def test_currently_a_member_is_never_cleared(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(7, "active", WHEN)
        aggregate.update_subscription(7, "cancelled", WHEN)

        assert aggregate.currently_a_member is True
        assert aggregate.is_member is False


class TestDeactivation:
    """Tests for the deactivation rule."""

    def test_other_active_subscription_prevents_deactivation(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(1, "active", WHEN)
        aggregate.create_subscription(2, "active", WHEN)
        aggregate.collect_events()

        aggregate.update_subscription(2, "cancelled", WHEN)

        assert "MembershipDeactivated" not in _types(aggregate.collect_events())
        assert aggregate.is_member is True

    def test_last_active_subscription_cancelled_deactivates_once(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(1, "active", WHEN)
        aggregate.create_subscription(2, "active", WHEN)
        aggregate.collect_events()

        aggregate.update_subscription(1, "cancelled", WHEN)
        first = aggregate.collect_events()
        aggregate.update_subscription(2, "cancelled", WHEN)
        second = aggregate.collect_events()

        assert "MembershipDeactivated" not in _types(first)
        assert _types(second).count("MembershipDeactivated") == 1

    def test_suspensions_deactivate(self):
        for status in ("suspended-payment", "suspended-manual"):
            aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
            aggregate.create_subscription(1, "active", WHEN)
            aggregate.collect_events()

            aggregate.update_subscription(1, status, WHEN)

            assert _types(aggregate.collect_events()) == [
                "SubscriptionUpdated",
                "MembershipDeactivated",
            ]

    def test_other_statuses_do_not_deactivate(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(1, "active", WHEN)
        aggregate.collect_events()

        aggregate.update_subscription(1, "on-hold", WHEN)

        assert _types(aggregate.collect_events()) == ["SubscriptionUpdated"]

    def test_status_map_is_updated_on_every_observation(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_subscription(1, "active", WHEN)
        aggregate.update_subscription(1, "active", WHEN)
        aggregate.update_subscription(1, "pending-cancel", WHEN)

        assert aggregate.subscriptions.statuses == {1: "pending-cancel"}


class TestBoardMembership:
    """Tests for board capability changes."""

    def test_created_with_board_capability_adds_to_board(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.create_customer(_jane(capabilities=(BOARD_CAPABILITY,)), WHEN)

        assert _types(aggregate.collect_events()) == [
            "CustomerCreated",
            "CustomerBecameBoardMember",
        ]
        assert aggregate.is_board_member is True

    def test_capability_removed_removes_from_board(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_customer(_jane(capabilities=(BOARD_CAPABILITY,)), WHEN)
        aggregate.collect_events()

        aggregate.update_customer(_jane(), WHEN)

        events = aggregate.collect_events()
        assert _types(events) == ["CustomerUpdated", "CustomerRemovedFromBoard"]
        assert aggregate.is_board_member is False

    def test_unchanged_board_capability_records_nothing_derived(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)
        aggregate.create_customer(_jane(capabilities=(BOARD_CAPABILITY,)), WHEN)
        aggregate.collect_events()

        aggregate.update_customer(_jane(capabilities=(BOARD_CAPABILITY,)), WHEN)

        assert _types(aggregate.collect_events()) == ["CustomerUpdated"]

    def test_import_takes_over_board_state_silently(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.import_customer(_jane(capabilities=(BOARD_CAPABILITY,)), WHEN)

        assert _types(aggregate.collect_events()) == ["CustomerImported"]
        assert aggregate.is_board_member is True


class TestCustomerProfile:
    """Tests for profile facts and deletion."""

    def test_profile_email_is_canonical(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.create_customer(_jane(email="  Jane@X.COM "), WHEN)

        assert aggregate.profile.email == "jane@x.com"
        assert aggregate.identity.email == "jane@x.com"

    def test_delete_twice_records_once(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.delete_customer(WHEN)
        aggregate.delete_customer(WHEN)

        assert _types(aggregate.collect_events()) == ["CustomerDeleted"]
        assert aggregate.deleted is True

    def test_user_membership_records_only_the_fact(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        aggregate.create_user_membership(9, 55, "active", WHEN)

        assert aggregate.collect_events() == [
            UserMembershipCreated(
                customer_id=CUSTOMER_ID,
                membership_id=9,
                plan_id=55,
                status="active",
                occurred_at=WHEN,
            )
        ]


class TestWaiverAssignment:
    """Tests for waiver assignment bookkeeping."""

    def test_assign_waiver_records_once(self):
        aggregate = MembershipAggregate(customer_id=CUSTOMER_ID)

        assert aggregate.assign_waiver("w-1", WHEN) is True
        assert aggregate.assign_waiver("w-1", WHEN) is False

        assert aggregate.collect_events() == [
            WaiverAssignedToCustomer(
                customer_id=CUSTOMER_ID, waiver_id="w-1", occurred_at=WHEN
            )
        ]
        assert aggregate.has_waiver("w-1")


class TestReplay:
    """Tests for replaying stored history."""

    def _history(self):
        profile = _jane(capabilities=(BOARD_CAPABILITY,))
        return [
            CustomerCreated(
                customer_id=CUSTOMER_ID,
                username=profile.username,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                slack_id=profile.slack_id,
                capabilities=profile.capabilities,
                card_numbers=profile.card_numbers,
                occurred_at=WHEN,
            ),
            CustomerBecameBoardMember(customer_id=CUSTOMER_ID, occurred_at=WHEN),
            SubscriptionCreated(
                customer_id=CUSTOMER_ID,
                subscription_id=1,
                status="need-id-check",
                occurred_at=WHEN,
            ),
            SubscriptionUpdated(
                customer_id=CUSTOMER_ID,
                subscription_id=1,
                status="active",
                occurred_at=WHEN,
            ),
            MembershipActivated(customer_id=CUSTOMER_ID, occurred_at=WHEN),
            WaiverAssignedToCustomer(
                customer_id=CUSTOMER_ID, waiver_id="w-1", occurred_at=WHEN
            ),
        ]

    def test_replay_is_deterministic(self):
        history = self._history()

        first = MembershipAggregate.replay(CUSTOMER_ID, history)
        second = MembershipAggregate.replay(CUSTOMER_ID, history)

        assert first == second
        assert first.version == len(history)
        assert first.is_member is True
        assert first.is_board_member is True
        assert first.has_waiver("w-1")

    def test_replay_records_no_events(self):
        aggregate = MembershipAggregate.replay(CUSTOMER_ID, self._history())

        assert aggregate.pending_events == ()

    def test_replayed_state_derives_like_the_live_one(self):
        live = MembershipAggregate(customer_id=CUSTOMER_ID)
        live.create_subscription(1, "active", WHEN)
        replayed = MembershipAggregate.replay(CUSTOMER_ID, live.collect_events())

        live.update_subscription(1, "cancelled", WHEN)
        replayed.update_subscription(1, "cancelled", WHEN)

        assert _types(live.collect_events()) == _types(replayed.collect_events())

    def test_replay_of_removal_and_deletion(self):
        history = [
            CustomerImported(
                customer_id=CUSTOMER_ID,
                username=None,
                first_name="Jane",
                last_name="Doe",
                email="jane@x.com",
                slack_id=None,
                capabilities=(BOARD_CAPABILITY,),
                card_numbers=(),
                occurred_at=WHEN,
            ),
            CustomerRemovedFromBoard(customer_id=CUSTOMER_ID, occurred_at=WHEN),
            SubscriptionImported(
                customer_id=CUSTOMER_ID,
                subscription_id=1,
                status="cancelled",
                occurred_at=WHEN,
            ),
            MembershipDeactivated(customer_id=CUSTOMER_ID, occurred_at=WHEN),
            CustomerDeleted(customer_id=CUSTOMER_ID, occurred_at=WHEN),
        ]

        aggregate = MembershipAggregate.replay(CUSTOMER_ID, history)

        assert aggregate.is_board_member is False
        assert aggregate.is_member is False
        assert aggregate.deleted is True
