"""
Unit tests for logger module.
"""

import json
from unittest.mock import MagicMock, patch

import structlog

from profile_graph.utils.logger import configure_logging, get_logger, mask_credentials


class TestMaskCredentials:
    """Test cases for mask_credentials processor."""

    def test_masks_api_key_field(self):
        """Test that api_key fields are masked."""
        # Arrange
        event_dict = {"event": "Calling completion endpoint", "api_key": "sk-1234567890"}

        # Act
        result = mask_credentials(MagicMock(), "info", event_dict)

        # Assert
        assert result["api_key"] == "***MASKED***"

    def test_masks_prefixed_and_suffixed_fields(self):
        # Arrange
        event_dict = {
            "browserless_token": "bl-secret",
            "auth_header": "Bearer sk-1",
            "openai-api_key": "sk-2",
        }

        # Act
        result = mask_credentials(MagicMock(), "info", event_dict)

        # Assert
        assert set(result.values()) == {"***MASKED***"}

    def test_does_not_mask_non_sensitive_fields(self):
        """Test that fields merely containing a sensitive word are kept."""
        # Arrange
        event_dict = {
            "event": "Source scraped",
            "url": "https://www.reddit.com/search/?q=tools",
            "content_length": 4210,
            "author": "someone",
            "tokens_used": 812,
        }

        # Act
        result = mask_credentials(MagicMock(), "info", dict(event_dict))

        # Assert
        assert result == event_dict


class TestConfigureLogging:
    """Test cases for configure_logging function."""

    @patch("profile_graph.utils.logger.Path")
    @patch("profile_graph.utils.logger.logging")
    @patch("profile_graph.utils.logger.structlog")
    def test_creates_logs_directory(self, mock_structlog, mock_logging, mock_path):
        """Test that configure_logging creates the log directory."""
        # Arrange
        mock_log_path = MagicMock()
        mock_path.return_value = mock_log_path

        # Act
        configure_logging(log_file="logs/test.log")

        # Assert
        mock_log_path.parent.mkdir.assert_called_once_with(parents=True, exist_ok=True)

    @patch("profile_graph.utils.logger.logging")
    @patch("profile_graph.utils.logger.structlog")
    def test_creates_nested_log_directories(self, mock_structlog, mock_logging, tmp_path):
        """Test that a log_file several directories deep gets its parents created."""
        # Arrange
        log_file = tmp_path / "var" / "profile-graph" / "run.log"

        # Act
        configure_logging(log_file=str(log_file))

        # Assert
        assert log_file.parent.is_dir()
        mock_logging.FileHandler.assert_called_once_with(str(log_file))

    @patch("profile_graph.utils.logger.Path")
    @patch("profile_graph.utils.logger.logging")
    @patch("profile_graph.utils.logger.structlog")
    def test_configures_masking_and_json(self, mock_structlog, mock_logging, mock_path):
        """Test that the processor chain masks credentials before rendering JSON."""
        # Act
        configure_logging(log_level="debug")

        # Assert
        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert mask_credentials in processors
        assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value
        assert mock_logging.basicConfig.call_args.kwargs["level"] == mock_logging.DEBUG


class TestGetLogger:
    """Test cases for get_logger function."""

    def test_binds_context(self):
        """Test that correlation_id, phase and component reach the log line."""
        # Act
        with structlog.testing.capture_logs() as captured:
            logger = get_logger(
                correlation_id="test-id", phase="generation", component="generator"
            )
            logger.info("Calling completion endpoint", model="gpt-3.5-turbo")

        # Assert
        assert captured[0]["correlation_id"] == "test-id"
        assert captured[0]["phase"] == "generation"
        assert captured[0]["component"] == "generator"
        assert captured[0]["model"] == "gpt-3.5-turbo"

    def test_generates_correlation_id_if_not_provided(self):
        with structlog.testing.capture_logs() as captured:
            logger = get_logger()
            logger.info("event")

        assert len(captured[0]["correlation_id"]) == 36

    def test_masks_credentials_in_rendered_output(self):
        """Test the masking processor inside a rendering chain."""
        # Arrange
        structlog.configure(
            processors=[mask_credentials, structlog.processors.JSONRenderer()],
            logger_factory=structlog.ReturnLoggerFactory(),
            cache_logger_on_first_use=False,
        )
        try:
            logger = get_logger(correlation_id="test-id")

            # Act
            line = logger.info("Calling completion endpoint", api_key="sk-live-123")
        finally:
            structlog.reset_defaults()

        # Assert
        data = json.loads(line)
        assert data["api_key"] == "***MASKED***"
        assert "sk-live-123" not in line
