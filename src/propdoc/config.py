"""propdoc configuration — external service credentials and rendering settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Generative text service (OpenRouter-compatible chat completions)
    openrouter_api_key: str = ""
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    summary_model: str = "google/gemini-2.0-flash-exp:free"
    summary_timeout_seconds: float = 20.0
    http_referer: str = ""

    @model_validator(mode="after")
    def _strip_api_keys(self) -> "Settings":
        """Strip whitespace/newlines from API keys — common paste error in dashboards."""
        if self.openrouter_api_key and self.openrouter_api_key != self.openrouter_api_key.strip():
            self.openrouter_api_key = self.openrouter_api_key.strip()
        return self

    # Template assets
    asset_timeout_seconds: float = 15.0
    template_asset_dir: str = ""

    # Rendering: empty font paths mean the built-in Helvetica pair
    font_regular_path: str = ""
    font_bold_path: str = ""
    paginate: bool = False
    suspicious_output_bytes: int = 100

    # MLflow is optional; tracing no-ops when mlflow isn't installed
    mlflow_tracking_uri: str = "sqlite:///mlruns/mlflow.db"
    mlflow_experiment_name: str = "propdoc"

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
