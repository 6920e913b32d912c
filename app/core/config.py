import os
import logging
from pydantic import BaseModel, Field
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

load_dotenv()

class SchedulingSettings(BaseModel):
    # IANA zone whose Monday 00:00 bounds the quota week
    timezone: str = Field(default=os.getenv("SCHEDULING_TIMEZONE", "UTC"))
    slot_duration_minutes: int = Field(default=int(os.getenv("SLOT_DURATION_MINUTES", "60")), gt=0)
    # "allow" keeps overlapping resubmissions, "reject" refuses them
    overlap_policy: str = Field(default=os.getenv("SLOT_OVERLAP_POLICY", "allow").lower())

class Config(BaseModel):
    app_name: str = "Interview Scheduling"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    
    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")
    
    # Slot lifecycle
    scheduling: SchedulingSettings = SchedulingSettings()
    
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

_logger = logging.getLogger(__name__)

# --- Startup Validation ---
def validate_settings(config: Config):
    """Fail fast on scheduling settings that would otherwise surface as per-request 500s."""
    scheduling = config.scheduling
    if scheduling.overlap_policy not in ("allow", "reject"):
        raise RuntimeError(
            f"FATAL: SLOT_OVERLAP_POLICY must be 'allow' or 'reject', got '{scheduling.overlap_policy}'."
        )
    try:
        ZoneInfo(scheduling.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise RuntimeError(
            f"FATAL: SCHEDULING_TIMEZONE must be an IANA zone name, got '{scheduling.timezone}'."
        )
    if config.environment == "production" and config.database_url.startswith("sqlite"):
        _logger.warning("⚠ Using SQLite in production; conditional updates serialize on a database-wide lock.")

settings = Config()
validate_settings(settings)
