"""Client configuration models."""

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_API_URL,
    DEFAULT_REMINDER_HORIZON_MINUTES,
    DEFAULT_TIMEOUT,
)


class ClientConfig(BaseModel):
    """Configuration for the task service client."""
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    reminder_horizon_minutes: int = Field(DEFAULT_REMINDER_HORIZON_MINUTES, gt=0)

    @property
    def base_url(self) -> str:
        """API URL without a trailing slash."""
        return self.api_url.rstrip("/")
