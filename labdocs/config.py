from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3001"
    host: str = "127.0.0.1"
    port: int = 8000

    range_parse_max_depth: int = 3
    report_boundary_status: bool = True

    profile_match_threshold: float = 0.5
    unknown_profile_key: str = "UNKNOWN"
    custom_package_key: str = "CUSTOM"
    custom_package_label: str = "Custom Test Package"

    evaluate_formulas: bool = True
    formula_precision: int = 2
    formula_max_length: int = 500


settings = Settings()
