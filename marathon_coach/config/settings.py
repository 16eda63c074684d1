from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    llm_provider: str = Field(default="openai", validation_alias="LLM_PROVIDER")
    llm_model: str = Field(default="gpt-4o-mini", validation_alias="LLM_MODEL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    chunk_weeks: int = Field(
        default=4,
        validation_alias="PLAN_CHUNK_WEEKS",
        description="Maximum weeks requested from the workout producer per call",
    )
    chunk_delay_seconds: float = Field(
        default=10.0,
        validation_alias="PLAN_CHUNK_DELAY_SECONDS",
        description="Fixed pause before every chunk request except the first",
    )
    min_chunk_fill_ratio: float = Field(
        default=0.25,
        validation_alias="PLAN_MIN_CHUNK_FILL_RATIO",
        description="Smallest fraction of expected days a chunk may return before generation fails",
    )
    min_plan_weeks: int = Field(default=12, validation_alias="PLAN_MIN_WEEKS")
    generation_timeout_seconds: float = Field(
        default=180.0,
        validation_alias="PLAN_GENERATION_TIMEOUT_SECONDS",
    )
    physiology_config_path: str | None = Field(
        default=None,
        validation_alias="PHYSIOLOGY_CONFIG_PATH",
        description="Optional YAML file overriding physiology constants",
    )

    smoothing_window_seconds: float = Field(default=10.0, validation_alias="TRACKING_SMOOTHING_WINDOW_SECONDS")
    cue_interval_seconds: float = Field(default=30.0, validation_alias="TRACKING_CUE_INTERVAL_SECONDS")
    pace_tolerance_seconds: float = Field(default=20.0, validation_alias="TRACKING_PACE_TOLERANCE_SECONDS")
    default_target_pace: str = Field(default="9:00", validation_alias="TRACKING_DEFAULT_TARGET_PACE")
    tick_interval_seconds: float = Field(default=1.0, validation_alias="TRACKING_TICK_INTERVAL_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("chunk_weeks")
    @classmethod
    def validate_chunk_weeks(cls, value: int) -> int:
        if value < 1:
            logger.warning(f"PLAN_CHUNK_WEEKS must be at least 1, got {value}. Using 1.")
            return 1
        return value

    @field_validator("min_chunk_fill_ratio")
    @classmethod
    def validate_fill_ratio(cls, value: float) -> float:
        return min(1.0, max(0.0, value))


settings = Settings()
