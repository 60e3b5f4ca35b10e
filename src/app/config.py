from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

SchemaVersion = Literal["basic", "extended"]


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # CORS settings
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000"
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,OPTIONS"
    cors_allow_headers: str = "*"

    # Vision model (OpenAI-compatible chat completions)
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    vision_model: str = "gpt-4o"
    max_tokens: int = 500
    temperature: float = 0.7
    request_timeout: float = 60.0

    # Only one result schema may be active per deployment
    schema_version: SchemaVersion = "extended"

    # Client side of the round trip
    api_base_url: str = "http://127.0.0.1:8000"
    client_timeout: float = 90.0

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Analysis defaults
# ──────────────────────────────────────────────
ANALYZE_PATH = "/api/analyze"
DEFAULT_IMAGE_MIME = "image/jpeg"
GENERIC_FAILURE_MESSAGE = "Failed to analyze image. Please try again."

# Confidence tiers: (lower bound inclusive, label), highest first
CONFIDENCE_TIERS: list[tuple[float, str]] = [
    (90, "high"),
    (70, "medium"),
    (0, "low"),
]

# Soft expectations stated by the extended prompt
EXPECTED_FACT_COUNT = 5
EXPECTED_SOURCE_COUNT = 3
