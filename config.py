"""
config.py — Application configuration from environment variables.
Every variable carries the LETCALC_ prefix.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Parser
    max_nesting_depth: int = 256

    # Logging
    log_level: str = "WARNING"

    # App
    app_title: str = "LetCalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="LETCALC_", env_file=".env", extra="ignore")
