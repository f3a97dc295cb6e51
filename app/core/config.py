# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="Fiber & Address Lookup API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    static_dir: str | None = Field(default=None, alias="STATIC_DIR")

    # Fiber providers
    bezeq_api_url:    str = Field(default="https://www.bezeq.co.il/internetandphone/internet/bfiber_addresscheck/api/check", alias="BEZEQ_API_URL")
    bezeq_check_page: str = Field(default="https://www.bezeq.co.il/internetandphone/internet/bfiber_addresscheck/", alias="BEZEQ_CHECK_PAGE")
    partner_api_url:  str = Field(default="https://www.partner.co.il/api/fiber-check", alias="PARTNER_API_URL")
    partner_link:     str = Field(default="https://www.partner.co.il/internet/fiber", alias="PARTNER_LINK")

    # Reverse geocoders
    israel_post_reverse_url: str = Field(default="https://api.israelpost.co.il/search/address/reverse", alias="ISRAEL_POST_REVERSE_URL")
    nominatim_reverse_url:   str = Field(default="https://nominatim.openstreetmap.org/reverse", alias="NOMINATIM_REVERSE_URL")

    browser_user_agent:  str = Field(default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36", alias="BROWSER_USER_AGENT")
    geocoder_user_agent: str = Field(default="CoordinateConverter/1.0", alias="GEOCODER_USER_AGENT")
    geocoder_languages:  str = Field(default="he,en", alias="GEOCODER_LANGUAGES")

    # Timeouts (seconds) per upstream call
    fiber_timeout:   float = Field(default=10.0, alias="FIBER_TIMEOUT")
    partner_timeout: float = Field(default=8.0, alias="PARTNER_TIMEOUT")
    geocode_timeout: float = Field(default=5.0, alias="GEOCODE_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[1] / ".env"),  # app/.env
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]

settings = Settings()
