from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    # PostgreSQL database
    database_url: str = "postgresql://localhost:5432/chordfinder"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    # Scraping
    search_timeout_s: float = 10.0
    extract_timeout_s: float = 15.0
    max_results: int = 10
    min_content_chars: int = 50
    user_agent: str = DEFAULT_USER_AGENT
    enable_script_extraction: bool = True  # last-resort <script> heuristic

    # Songs
    share_token_length: int = 8

    # App
    static_dir: str = "public"
    cors_origins: str = "*"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"
    log_to_file: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
