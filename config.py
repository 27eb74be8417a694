"""
Central settings for the quiz card service.

ASSUMPTIONS / CHECK:
- PORT / QUESTIONS_PATH / LOG_LEVEL may come from a `.env` file for local dev.
- Paths default to folders next to this file, so the service runs from any cwd.
"""
from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseModel):
    service_name: str = "quiz-cards"
    version: str = "0.1.0"

    # Listener (binds all interfaces)
    host: str = "0.0.0.0"
    port: int = 3000

    # Static question source, loaded once at startup
    dataset_path: Path = Field(default=BASE_DIR / "data" / "questions.json")

    # Views and public assets
    templates_dir: Path = Field(default=BASE_DIR / "templates")
    public_dir: Path = Field(default=BASE_DIR / "public")
    public_prefix: str = "/public"
    logo_filename: str = "logo.png"

    # PDF card
    pdf_filename_prefix: str = "quiz-150ans"
    qr_caption: str = "Réponse :"

    log_level: str = "INFO"

    @property
    def logo_path(self) -> Path:
        return self.public_dir / self.logo_filename

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()  # picks up PORT etc. from .env for local dev

        overrides: dict = {}
        port = os.getenv("PORT")
        if port:
            try:
                overrides["port"] = int(port)
            except ValueError as e:
                raise ValueError(f"PORT must be an integer, got {port!r}") from e
        if path := os.getenv("QUESTIONS_PATH"):
            overrides["dataset_path"] = Path(path)
        if level := os.getenv("LOG_LEVEL"):
            overrides["log_level"] = level.upper()
        return cls(**overrides)


settings = Settings.from_env()
