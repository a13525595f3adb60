from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="docker", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_compliance", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    LOG_JSON: bool = Field(default=False, validation_alias=AliasChoices("LOG_JSON", "log_json"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Infrastructure
    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/gst_compliance",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )
    CREATE_TABLES_ON_STARTUP: bool = Field(
        default=True,
        validation_alias=AliasChoices("CREATE_TABLES_ON_STARTUP", "create_tables_on_startup"),
    )

    # Filed returns freeze the invoices/purchases of their period
    LOCK_FILED_PERIODS: bool = Field(default=True, validation_alias=AliasChoices("LOCK_FILED_PERIODS", "lock_filed_periods"))

    # Late fee / interest
    LATE_FEE_INTEREST_RATE: float = Field(
        default=0.18,
        validation_alias=AliasChoices("LATE_FEE_INTEREST_RATE", "late_fee_interest_rate"),
    )

    # Compliance score heuristic (product weights, not statutory policy)
    SCORE_OVERDUE_PENALTY: int = Field(default=15, validation_alias=AliasChoices("SCORE_OVERDUE_PENALTY", "score_overdue_penalty"))
    SCORE_LATE_PENALTY: int = Field(default=5, validation_alias=AliasChoices("SCORE_LATE_PENALTY", "score_late_penalty"))
    SCORE_ON_TIME_BONUS: int = Field(default=2, validation_alias=AliasChoices("SCORE_ON_TIME_BONUS", "score_on_time_bonus"))
    SCORE_BONUS_CAP: int = Field(default=10, validation_alias=AliasChoices("SCORE_BONUS_CAP", "score_bonus_cap"))
    SCORE_EXCELLENT_THRESHOLD: int = Field(default=90, validation_alias=AliasChoices("SCORE_EXCELLENT_THRESHOLD", "score_excellent_threshold"))
    SCORE_GOOD_THRESHOLD: int = Field(default=70, validation_alias=AliasChoices("SCORE_GOOD_THRESHOLD", "score_good_threshold"))
    SCORE_FAIR_THRESHOLD: int = Field(default=50, validation_alias=AliasChoices("SCORE_FAIR_THRESHOLD", "score_fair_threshold"))

    # Deadline reminders
    REMINDER_WINDOW_DAYS: int = Field(default=7, validation_alias=AliasChoices("REMINDER_WINDOW_DAYS", "reminder_window_days"))


settings = Settings()
