"""Outbox integration for the membership bounded context."""

from membership.infrastructure.outbox.reactors import GoogleGroupsReactor, SlackReactor
from membership.infrastructure.outbox.serializer import MembershipEventSerializer

__all__ = [
    "GoogleGroupsReactor",
    "MembershipEventSerializer",
    "SlackReactor",
]
