import logging
import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

from fsroots.paths import expand_home, normalize_path

ALLOWED_DIRECTORIES_ENV = "FSROOTS_ALLOWED_DIRECTORIES"
LOG_LEVEL_ENV = "FSROOTS_LOG_LEVEL"


@dataclass
class ServerConfig:
    """Settings for a filesystem server.

    `allowed_directories` are used until a client supplies valid roots of
    its own.
    """

    allowed_directories: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    def __post_init__(self):
        self.allowed_directories = [
            normalize_path(os.path.abspath(expand_home(d)))
            for d in self.allowed_directories
        ]

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "ServerConfig":
        """Build a config from the environment, loading a `.env` file first.

        Variables already set in the environment win over the `.env` file.
        """
        load_dotenv(dotenv_path)

        raw_dirs = os.getenv(ALLOWED_DIRECTORIES_ENV, "")
        directories = [d.strip() for d in raw_dirs.split(os.pathsep) if d.strip()]

        return cls(
            allowed_directories=directories,
            log_level=os.getenv(LOG_LEVEL_ENV, "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr. Stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
