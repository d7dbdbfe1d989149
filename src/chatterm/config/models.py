"""Settings models.

Hides the shape of the configuration record and its default values.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


class RequestPolicy(str, Enum):
    """How overlapping completion requests are scheduled."""

    SERIAL = "serial"          # One request in flight, later ones queued
    CONCURRENT = "concurrent"  # Every submission dispatched immediately


class LLMSettings(BaseModel):
    """Completion service settings."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="openai", description="Provider type: 'openai' or 'http'")
    model: str = Field(default="gpt-3.5-turbo", description="Model name sent with each request")
    api_key: str = Field(default="", description="Bearer token for the completion service")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Chat completions URL")
    max_tokens: int = Field(default=2000, ge=1, description="Maximum tokens per reply")
    request_policy: RequestPolicy = Field(
        default=RequestPolicy.SERIAL,
        description="Scheduling of overlapping requests"
    )


class UISettings(BaseModel):
    """Display settings."""

    model_config = ConfigDict(frozen=True)

    theme: str = Field(default="catppuccin-mocha", description="Color theme name")
    max_width: int = Field(
        default=100,
        ge=0,
        description="Maximum transcript wrap width (0 disables the cap)"
    )
    show_timestamp: bool = Field(default=True, description="Show times in message headers")
    focus_on_reply: bool = Field(
        default=False,
        description="Enter focus mode on the newest assistant reply"
    )
    input_char_limit: int = Field(default=4096, ge=1, description="Maximum input length")


class StorageSettings(BaseModel):
    """Filesystem settings."""

    model_config = ConfigDict(frozen=True)

    chats_dir: str = Field(default="chats", description="Directory for saved chats")


class Settings(BaseModel):
    """Complete application settings."""

    model_config = ConfigDict(frozen=True)

    llm: LLMSettings = Field(default_factory=LLMSettings)
    ui: UISettings = Field(default_factory=UISettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
