from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    state_file: str = "data/state/workspace.json"

    fx_api_url: str = "https://api.frankfurter.dev/v1/latest"
    fx_refresh_hours: int = 24
    fx_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
