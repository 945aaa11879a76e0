"""Unit tests for the card reconciliation checks."""

from audit.domain.checks import inactive_member_cards, unknown_active_cards
from audit.domain.value_objects import CardHolder, MemberRecord


def _member(
    id=1, first="Jane", last="Doe", cards=("123",), is_member=True
) -> MemberRecord:
    return MemberRecord(
        id=id,
        first_name=first,
        last_name=last,
        email=f"{first}@x.com".lower() if first else None,
        is_member=is_member,
        cards=cards,
    )


class TestUnknownActiveCards:
    def test_zero_padded_card_of_matching_member_is_fine(self):
        holders = [CardHolder("00123", "Jane", "Doe")]

        assert unknown_active_cards(holders, [_member()]) == []

    def test_card_without_holder_record(self):
        holders = [CardHolder("00999", "Jane", "Doe")]

        assert unknown_active_cards(holders, [_member()]) == [
            "Jane Doe has the active card (00999) but I have no membership "
            "record of them with that card."
        ]

    def test_card_on_multiple_accounts(self):
        members = [_member(id=1), _member(id=2)]

        issues = unknown_active_cards([CardHolder("123", "Jane", "Doe")], members)

        assert issues == [
            "Jane Doe has the active card (123) but is connected to multiple accounts."
        ]

    def test_name_mismatch_and_inactive_member_are_both_reported(self):
        members = [_member(first="Janet", is_member=False)]

        issues = unknown_active_cards([CardHolder("123", "Jane", "Doe")], members)

        assert issues == [
            "Jane Doe has the active card (123) but is listed as Janet Doe in our "
            "records.",
            "Jane Doe has the active card (123) but is not currently a member.",
        ]


class TestInactiveMemberCards:
    def test_active_member_with_inactive_card(self):
        members = [_member(cards=("123", "456"))]

        issues = inactive_member_cards([CardHolder("0123", "Jane", "Doe")], members)

        assert issues == [
            "Jane Doe has the card 456 but it doesn't appear to be active"
        ]

    def test_non_members_are_not_checked(self):
        members = [_member(is_member=False)]

        assert inactive_member_cards([], members) == []

    def test_members_without_full_name_are_not_checked(self):
        members = [_member(first=None)]

        assert inactive_member_cards([], members) == []
