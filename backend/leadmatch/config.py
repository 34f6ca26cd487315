from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Lead Qualifier & Property Matcher"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./leadmatch.db"
    # Insert the demo catalog on startup when the properties table is empty
    seed_catalog: bool = True

    llm_provider: Literal["claude", "openai", "fake"] = "claude"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_temperature: float = 0.0
    llm_timeout_seconds: float = 30.0
    # Scenario served by the "fake" provider when no scenario is requested
    fake_scenario: str = "budget_seeker"

    cors_origins: str = "http://localhost:5173"

    model_config = {"env_file": ".env"}


settings = Settings()
