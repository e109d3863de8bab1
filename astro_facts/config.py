from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "astro-facts"
    ENV: str = "local"
    DEBUG: bool = False

    # ─── Strength bands ───────────────────
    SHADBALA_STRONG_THRESHOLD: float = 1.2
    SHADBALA_MEDIUM_THRESHOLD: float = 0.9
    SHADBALA_NORMALIZE_CEILING: float = 200

    # ─── Fact sheet ───────────────────────
    DERIVE_DIVISIONALS: bool = False

    # ─── Validation ───────────────────────
    STRICT_VALIDATION: bool = True

    model_config = SettingsConfigDict(
        env_prefix="ASTRO_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
