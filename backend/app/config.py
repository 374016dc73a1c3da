from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Outbound image fetches (logo, body diagram, referral images, library)
    image_fetch_timeout: float = 15.0

    # Report layout
    report_title: str = "Functional Abilities Determination"
    digital_library_columns: int = 6

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
