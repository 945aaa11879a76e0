"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AuditSettings,
    DatabaseSettings,
    FeatureFlagSettings,
    LoggingSettings,
    OutboxSettings,
    ReactorSettings,
    SlackSettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections
        assert settings.pool_max_connections <= 20

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_min_connections == 5
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)

    def test_connection_string_hides_password(self):
        settings = DatabaseSettings(password="secret")

        assert "secret" not in settings.connection_string


class TestEnvironmentOverrides:
    def test_database_settings_read_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("MEMBERSHIP_DB_HOST", "db.internal")
        monkeypatch.setenv("MEMBERSHIP_DB_CREATE_SCHEMA", "false")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.create_schema is False

    def test_list_settings_parse_json(self, monkeypatch):
        monkeypatch.setenv("MEMBERSHIP_SLACK_RESTRICTED_CHANNELS", '["general"]')

        assert SlackSettings().restricted_channels == ["general"]

    def test_feature_flags_default_off(self):
        flags = FeatureFlagSettings()

        assert not flags.need_id_check_gets_added_to_slack_and_email
        assert not flags.keep_members_in_slack_and_email
        assert not flags.remove_deactivated_members_from_groups

    def test_feature_flag_from_environment(self, monkeypatch):
        monkeypatch.setenv("MEMBERSHIP_FEATURE_KEEP_MEMBERS_IN_SLACK_AND_EMAIL", "1")

        assert FeatureFlagSettings().keep_members_in_slack_and_email is True


class TestDefaults:
    def test_reactor_targets(self):
        settings = ReactorSettings()

        assert settings.members_group == "members@denhac.org"
        assert settings.board_channel == "board"
        assert settings.printer_3d_plan_id is None

    def test_audit_defaults_exclude_the_general_group(self):
        assert "denhac@denhac.org" in AuditSettings().excluded_groups

    def test_outbox_batch_size_is_bounded(self):
        with pytest.raises(ValidationError):
            OutboxSettings(batch_size=0)


class TestLoggingSettings:
    def test_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("MEMBERSHIP_LOG_LEVEL", "debug")

        assert LoggingSettings().level == "DEBUG"

    def test_unknown_format_is_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")
