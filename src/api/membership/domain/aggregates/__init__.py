"""Aggregates for the membership bounded context."""

from membership.domain.aggregates.membership import MembershipAggregate

__all__ = ["MembershipAggregate"]
