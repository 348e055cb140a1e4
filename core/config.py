import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SQLITE_PATH = Path("data/app.db")
DEFAULT_PROMPTS_PATH = Path(__file__).resolve().parent.parent / "prompts" / "prompts.yaml"


@dataclass(frozen=True)
class AppConfig:
    log_level: str = "INFO"
    database_url: Optional[str] = None  # optional: Postgres instead of local SQLite
    sqlite_path: Path = DEFAULT_SQLITE_PATH
    prompts_path: Path = DEFAULT_PROMPTS_PATH
    share_base_url: str = ""


def load_config() -> AppConfig:
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL '{log_level}'. Use one of: {', '.join(LOG_LEVELS)}."
        )

    db_url = os.getenv("DATABASE_URL", "").strip() or None
    sqlite_path = os.getenv("SQLITE_PATH", "").strip()
    prompts_path = os.getenv("PROMPTS_PATH", "").strip()

    return AppConfig(
        log_level=log_level,
        database_url=db_url,
        sqlite_path=Path(sqlite_path) if sqlite_path else DEFAULT_SQLITE_PATH,
        prompts_path=Path(prompts_path) if prompts_path else DEFAULT_PROMPTS_PATH,
        share_base_url=os.getenv("SHARE_BASE_URL", "").strip(),
    )
