from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    env: str = "dev"
    log_level: str = "INFO"

    base_url: str = "https://www.ryanair.com"
    market: str = "gb/en"

    headless: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    )
    navigation_timeout_ms: int = 60000
    cookie_timeout_ms: int = 5000
    results_timeout_ms: int = 30000
    settle_delay_seconds: float = 2.0

    screenshots_dir: str = "./data/screenshots"
    html_snapshots_dir: str = "./data/html_snapshots"
    debug_screenshots: bool = False

    def model_post_init(self, __context):
        if self.navigation_timeout_ms <= 0 or self.results_timeout_ms <= 0:
            raise ValueError("Timeouts must be positive")
        if self.settle_delay_seconds < 0:
            raise ValueError("SETTLE_DELAY_SECONDS cannot be negative")

    class Config:
        env_file = ".env"
        env_prefix = "FAREWATCH_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
