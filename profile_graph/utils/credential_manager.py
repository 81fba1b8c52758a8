"""
Credential Manager Module
Loads API keys from the .env file and tells real keys apart from placeholders.
"""

import os
from pathlib import Path
from typing import Dict, Optional

import structlog
from dotenv import load_dotenv

logger = structlog.get_logger(__name__)

# Values shipped in .env.example; treated the same as an unset key
PLACEHOLDER_VALUES: Dict[str, str] = {
    "OPENAI_API_KEY": "your-openai-api-key",
    "BROWSERLESS_API_KEY": "your-browserless-api-key",
}


class CredentialManager:
    """Reads credentials and plain settings from .env and the environment."""

    def __init__(self, env_file: Path = Path(".env")):
        """
        Initialize credential manager.

        Args:
            env_file: Path to .env file holding credentials
        """
        self.env_file = env_file
        self._load_credentials()

    def _load_credentials(self) -> None:
        """Load credentials from the .env file if present.

        Variables already set in the process environment take precedence.
        """
        if self.env_file.exists():
            load_dotenv(self.env_file, override=False)
            logger.info("credentials_loaded_from_env", env_file=str(self.env_file))
            self._warn_insecure_permissions()
        else:
            logger.debug("no_env_file_found", env_file=str(self.env_file))

    def _warn_insecure_permissions(self) -> None:
        """Warn when the .env file is readable by group or others (Unix only)."""
        if os.name == "nt":
            return
        mode = self.env_file.stat().st_mode & 0o777
        if mode & 0o077:
            logger.warning(
                "env_file_permissions_too_open",
                env_file=str(self.env_file),
                mode=oct(mode),
            )

    def get_credential(self, key: str) -> Optional[str]:
        """
        Get a credential, ignoring unset, empty and placeholder values.

        Args:
            key: Environment variable name (e.g., "OPENAI_API_KEY")

        Returns:
            Credential value, or None when no usable value is configured
        """
        value = os.getenv(key, "").strip()
        if not value:
            logger.debug("credential_not_set", key=key)
            return None

        if value == PLACEHOLDER_VALUES.get(key):
            logger.warning("credential_is_placeholder", key=key)
            return None

        logger.debug("credential_found", key=key, value=self.mask_credential(value))
        return value

    @staticmethod
    def get_setting(key: str) -> Optional[str]:
        """Get a non-secret setting; empty strings count as unset."""
        value = os.getenv(key, "").strip()
        return value or None

    def check_credentials(self) -> Dict[str, bool]:
        """Report which known credentials have usable values."""
        status = {key: self.get_credential(key) is not None for key in PLACEHOLDER_VALUES}
        logger.info(
            "credentials_checked",
            configured=[key for key, present in status.items() if present],
        )
        return status

    @staticmethod
    def mask_credential(value: str, show_chars: int = 3) -> str:
        """
        Mask credential for display in logs.

        Args:
            value: Credential value to mask
            show_chars: Number of characters to show at start

        Returns:
            Masked credential (e.g., "sk-***")
        """
        if not value or len(value) <= show_chars:
            return "***"
        return f"{value[:show_chars]}{'*' * (len(value) - show_chars)}"
