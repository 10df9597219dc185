"""Configuration management for versefill."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


@dataclass
class Config:
    """versefill configuration.

    Attributes:
        resolver: Resolver backend ('static', 'lookup_api', 'bolls')
        api_url: Verse lookup endpoint for the 'lookup_api' resolver
        api_token: Optional bearer token sent to the lookup endpoint
        translation: Bible translation requested from the resolver
        verses_file: JSON verse table for the 'static' resolver
        resolution_timeout: Seconds before an outstanding lookup counts as failed
        auto_resolve: Resolve new citations as soon as they are typed
        reject_placeholders: Treat placeholder verse text as not found
        enable_rate_limiting: Enable resolver rate limiting
        max_calls_per_minute: Resolver calls allowed per minute
    """

    # Resolver Settings
    resolver: str = "static"
    api_url: Optional[str] = None
    api_token: Optional[str] = None
    translation: str = "KJV"
    verses_file: Optional[str] = None

    # Engine Settings
    resolution_timeout: float = 10.0
    auto_resolve: bool = True
    reject_placeholders: bool = True

    # Rate Limiting
    enable_rate_limiting: bool = True
    max_calls_per_minute: int = 60

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Path to .env file (optional)

        Returns:
            Config instance with values from environment
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            resolver=os.getenv("VERSEFILL_RESOLVER", "static"),
            api_url=os.getenv("VERSEFILL_API_URL"),
            api_token=os.getenv("VERSEFILL_API_TOKEN"),
            translation=os.getenv("VERSEFILL_TRANSLATION", "KJV"),
            verses_file=os.getenv("VERSEFILL_VERSES_FILE"),
            resolution_timeout=float(os.getenv("VERSEFILL_RESOLUTION_TIMEOUT", "10")),
            auto_resolve=os.getenv("VERSEFILL_AUTO_RESOLVE", "true").lower() == "true",
            reject_placeholders=os.getenv("VERSEFILL_REJECT_PLACEHOLDERS", "true").lower()
            == "true",
            enable_rate_limiting=os.getenv("VERSEFILL_ENABLE_RATE_LIMITING", "true").lower()
            == "true",
            max_calls_per_minute=int(os.getenv("VERSEFILL_MAX_CALLS_PER_MINUTE", "60")),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Load configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
