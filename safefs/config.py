"""
Configuration for safe file system operations.
"""

import os
from dataclasses import dataclass


@dataclass
class FileSystemConfig:
    """Configuration shared by the file and directory managers."""

    # Text handling
    encoding: str = "utf-8"

    # Bounded retries handed to the recursive removal strategies
    max_retries: int = 3
    retry_delay: float = 0.1  # Seconds between retries

    # Shell fallback
    shell_timeout_seconds: float = 60.0

    # Default permissions for created directories
    directory_mode: int = 0o777

    @classmethod
    def from_env(cls) -> "FileSystemConfig":
        """Build a configuration from SAFEFS_* environment variables."""
        defaults = cls()
        return cls(
            encoding=os.getenv("SAFEFS_ENCODING", defaults.encoding),
            max_retries=int(os.getenv("SAFEFS_MAX_RETRIES", str(defaults.max_retries))),
            retry_delay=float(os.getenv("SAFEFS_RETRY_DELAY", str(defaults.retry_delay))),
            shell_timeout_seconds=float(
                os.getenv("SAFEFS_SHELL_TIMEOUT", str(defaults.shell_timeout_seconds))
            ),
            directory_mode=int(
                os.getenv("SAFEFS_DIRECTORY_MODE", oct(defaults.directory_mode)), 8
            ),
        )
