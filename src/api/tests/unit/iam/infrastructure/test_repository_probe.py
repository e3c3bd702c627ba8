"""Unit tests for IAM repository domain probes."""

from unittest.mock import Mock

from iam.infrastructure.observability import DefaultUserRepositoryProbe
from infrastructure.observability import ObservationContext


class TestDefaultUserRepositoryProbe:
    """Tests for DefaultUserRepositoryProbe."""

    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultUserRepositoryProbe()
        assert probe._logger is not None

    def test_accepts_custom_logger(self):
        custom_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=custom_logger)
        assert probe._logger is custom_logger


class TestUserCreated:
    def test_logs_with_correct_parameters(self):
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.user_created(user_id="user-1", email="ethan@imf.gov")

        mock_logger.info.assert_called_once_with(
            "user_created", user_id="user-1", email="ethan@imf.gov"
        )


class TestLookups:
    def test_missing_email_is_debug(self):
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.email_not_found(email="nobody@imf.gov")

        mock_logger.debug.assert_called_once_with(
            "user_email_not_found", email="nobody@imf.gov"
        )

    def test_duplicate_email_is_warning(self):
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.duplicate_email(email="ethan@imf.gov")

        mock_logger.warning.assert_called_once_with(
            "duplicate_user_email", email="ethan@imf.gov"
        )


class TestWithContext:
    def test_includes_context_in_logs(self):
        mock_logger = Mock()
        context = ObservationContext(request_id="req-7")
        probe = DefaultUserRepositoryProbe(logger=mock_logger).with_context(context)

        probe.user_retrieved(user_id="user-1")

        mock_logger.debug.assert_called_once_with(
            "user_retrieved", user_id="user-1", request_id="req-7"
        )
