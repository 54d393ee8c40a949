from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    base_url: str = "https://www.binance.com"
    site_language: str = "en"
    api_path: str = "/bapi/composite/v1/public/cms/article/list/query"
    api_timeout: float = 1.5
    api_page_size: int = 10

    browser_headless: bool = True
    render_navigation_timeout: float = 30.0
    render_selector_timeout: float = 15.0

    cache_ttl: int = 3600

    log_level: str = "INFO"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    @property
    def announcement_url(self) -> str:
        return f"{self.base_url}/{self.site_language}/support/announcement"


settings = Settings()
