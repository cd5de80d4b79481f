from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv


@dataclass
class Config:
    """Configuration loaded from environment variables."""

    api_url: str
    api_resource: str = "api/data"
    timeout: int = 30
    log_path: Path = field(default_factory=lambda: Path("./logs"))

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        api_url = os.getenv("BOOKSHELF_API_URL")
        if not api_url:
            raise ValueError("Missing required environment variable: BOOKSHELF_API_URL")

        timeout = os.getenv("BOOKSHELF_TIMEOUT", "30")
        try:
            timeout_seconds = int(timeout)
        except ValueError:
            raise ValueError(f"BOOKSHELF_TIMEOUT must be an integer, got {timeout!r}")

        return cls(
            api_url=api_url.rstrip("/"),
            api_resource=os.getenv("BOOKSHELF_API_RESOURCE", "api/data"),
            timeout=timeout_seconds,
            log_path=Path(os.getenv("BOOKSHELF_LOG_PATH", "./logs")),
        )
