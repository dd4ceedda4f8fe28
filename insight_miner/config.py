"""Configuration management for Insight Miner"""
from typing import List

from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError

DEFAULT_CUMULIO_HOST = "https://api.cumul.io"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # Cumul.io Configuration
    CUMULIO_API_KEY: str = ""
    CUMULIO_API_SECRET: str = ""
    CUMULIO_API_HOST_URL: str = ""
    CUMULIO_API_VERSION: str = "0.1.0"
    CUMULIO_TIMEOUT: int = 30
    
    # OpenAI Configuration
    OPENAI_API_SECRET: str = ""
    OPENAI_COMPLETION_MODEL: str = "gpt-3.5-turbo-instruct"
    OPENAI_TIMEOUT: int = 60
    
    # Sampling parameters for dashboard planning
    COMPLETION_TEMPERATURE: float = 0.7
    COMPLETION_MAX_TOKENS: int = 1024
    COMPLETION_TOP_P: float = 1.0
    COMPLETION_FREQUENCY_PENALTY: float = 0.0
    COMPLETION_PRESENCE_PENALTY: float = 0.0
    
    # Polling Configuration
    POLL_INTERVAL_SECONDS: float = 5.0
    MAX_CONCURRENT_COMPOSITIONS: int = 4
    
    # Dashboard Configuration
    DASHBOARD_THEME: str = "bliss"
    DASHBOARD_NAME_PREFIX: str = "(AI) "
    DASHBOARD_LANGUAGE: str = "en"
    
    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
    
    @property
    def cumulio_host(self) -> str:
        """Platform host, honouring the optional override"""
        return (self.CUMULIO_API_HOST_URL or DEFAULT_CUMULIO_HOST).rstrip("/")
    
    def require_credentials(self) -> None:
        """
        Fail fast when a required credential is absent.
        
        Raises:
            ConfigurationError: listing every missing variable
        """
        problems: List[str] = []
        
        if not self.CUMULIO_API_KEY or not self.CUMULIO_API_SECRET:
            problems.append(
                "You must specify the `CUMULIO_API_KEY` and `CUMULIO_API_SECRET` environment "
                "variables. You can create these in your Cumul.io profile: "
                "https://app.cumul.io/profile/api-tokens."
            )
        if not self.OPENAI_API_SECRET:
            problems.append(
                "You must specify the `OPENAI_API_SECRET` environment variable. "
                "You can create an OpenAI account here: https://platform.openai.com/."
            )
        
        if problems:
            raise ConfigurationError(" ".join(problems))


# Global settings instance
settings = Settings()
