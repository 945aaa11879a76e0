"""Shared Kernel module.

This module contains foundational components that are explicitly shared across
the membership and audit bounded contexts: the outbox and event store ports,
the observation context, the gateway integrations and the access card
number conventions. Changes to this module affect both contexts and should be
carefully coordinated.
"""
