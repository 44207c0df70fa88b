from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCP_DICE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Most die draws a single tool call may perform.
    roll_cap: int = 10_000

    # Set for reproducible sessions; unset uses system randomness.
    rng_seed: int | None = None

    log_level: str = "INFO"


settings = Settings()
