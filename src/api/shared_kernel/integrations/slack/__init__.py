"""Slack Web API integration."""

from shared_kernel.integrations.slack.client import SlackClient
from shared_kernel.integrations.slack.protocols import ChatPlatform

__all__ = ["ChatPlatform", "SlackClient"]
