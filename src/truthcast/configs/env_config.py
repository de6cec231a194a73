import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from truthcast.utils.casting import parse_flag
from truthcast.utils.logger.config import LogLevel


class Env:
    # Truth evaluator
    TRUTHY_VALUES = os.getenv("TRUTHY_VALUES")

    # Logging
    LOG_ENABLED = os.getenv("TRUTH_LOG_ENABLED", "false")
    LOG_LEVEL = os.getenv("TRUTH_LOG_LEVEL", "INFO")
    LOG_STDOUT = os.getenv("TRUTH_LOG_STDOUT", "false")
    LOG_DIR = os.getenv("TRUTH_LOG_DIR", "logs")

    @classmethod
    def load(cls, dotenv_path: Optional[str] = None) -> None:
        """Load a ``.env`` file into the environment and re-read the settings.

        Without ``dotenv_path`` the file is searched from the working directory
        upwards. Variables already set in the environment win over the file.
        """
        path = dotenv_path or find_dotenv(usecwd=True)
        if path:
            load_dotenv(path)
        cls.TRUTHY_VALUES = os.getenv("TRUTHY_VALUES")
        cls.LOG_ENABLED = os.getenv("TRUTH_LOG_ENABLED", "false")
        cls.LOG_LEVEL = os.getenv("TRUTH_LOG_LEVEL", "INFO")
        cls.LOG_STDOUT = os.getenv("TRUTH_LOG_STDOUT", "false")
        cls.LOG_DIR = os.getenv("TRUTH_LOG_DIR", "logs")

    @classmethod
    def truthy_values(cls) -> Optional[list[str]]:
        """Split ``TRUTHY_VALUES`` on commas; ``None`` when unset or blank."""
        if not cls.TRUTHY_VALUES or not cls.TRUTHY_VALUES.strip():
            return None
        return [item.strip() for item in cls.TRUTHY_VALUES.split(",") if item.strip()]

    @classmethod
    def log_enabled(cls) -> bool:
        return parse_flag(cls.LOG_ENABLED)

    @classmethod
    def log_stdout(cls) -> bool:
        return parse_flag(cls.LOG_STDOUT)

    @classmethod
    def log_level(cls) -> LogLevel:
        return LogLevel.from_name(cls.LOG_LEVEL)

    @classmethod
    def validate(cls):
        checks = {
            "TRUTH_LOG_ENABLED": cls.log_enabled,
            "TRUTH_LOG_STDOUT": cls.log_stdout,
            "TRUTH_LOG_LEVEL": cls.log_level,
        }

        invalid_vars = []
        for var, check in checks.items():
            try:
                check()
            except ValueError:
                invalid_vars.append(var)

        if invalid_vars:
            raise ValueError(
                f"Invalid environment variables: {', '.join(invalid_vars)}"
            )
