"""
Configuration management for climate-futures

Loads settings from:
1. config/config.yaml
2. Environment variables (.env), prefixed with ``CLIMATE_``
3. Default values
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent


class Config(BaseSettings):
    """climate-futures configuration settings"""

    model_config = SettingsConfigDict(
        env_prefix="CLIMATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- LLM Configuration ---
    llm_provider: Literal["openai", "deepseek", "ollama"] = "openai"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("CLIMATE_LLM_API_KEY", "OPENAI_API_KEY", "llm_api_key"),
    )
    llm_base_url: str = ""
    llm_model: str = ""  # empty: provider default from LLMAdapter.PROVIDER_CONFIGS
    llm_timeout: int = 30

    # --- Generation Settings ---
    scenario_max_tokens: int = 1200
    scenario_temperature: float = 0.9
    qa_max_tokens: int = 400
    bulletin_max_tokens: int = 300
    narrative_temperature: float = 0.7

    # --- Scenario Store ---
    store_backend: Literal["sqlite", "memory"] = "sqlite"
    database_path: str = "climate_dashboard.db"
    seed_demo_scenario: bool = False

    # --- API Settings ---
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: str = "http://localhost:3000"  # Comma-separated string

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def llm_configured(self) -> bool:
        """True when the completion service can be called at all."""
        return bool(self.llm_api_key) or self.llm_provider == "ollama"

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = PROJECT_ROOT / "config" / "config.yaml") -> "Config":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(yaml_path) if yaml_path else Config.from_yaml()
    return _config
