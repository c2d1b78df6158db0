"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from taskboard.config.constants import (
    TASKS_API_BASE_URL,
    REGISTRY_PROXY_BASE_URL,
    REQUEST_TIMEOUT,
)

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""

    # Task backend
    TASKS_API_URL: str = os.getenv("TASKS_API_URL", TASKS_API_BASE_URL)

    # Registry proxy (MCP tools)
    REGISTRY_PROXY_URL: str = os.getenv("REGISTRY_PROXY_URL", REGISTRY_PROXY_BASE_URL)

    # HTTP
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", str(REQUEST_TIMEOUT)))

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required settings are present"""
        required = {
            "TASKS_API_URL": cls.TASKS_API_URL,
            "REGISTRY_PROXY_URL": cls.REGISTRY_PROXY_URL,
        }

        missing = [name for name, value in required.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be a positive number of seconds")

        return True


# Global settings instance
settings = Settings()
