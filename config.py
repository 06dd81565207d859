"""
Configuration for the workflow engine.

Settings are loaded from environment variables or a `.env` file next to this
module. SMS gateway credentials are read once here and handed to the
transport as a TransportConfig.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sms.transport import TransportConfig

ENV_PATH = Path(__file__).resolve().parent / ".env"
load_dotenv(ENV_PATH, override=False)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(default="sqlite:///workflows.db", validation_alias="DATABASE_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Melipayamak gateway
    sms_mode: str = Field(default="rest", validation_alias="SMS_MODE")
    sms_base_url: str | None = Field(default=None, validation_alias="SMS_BASE_URL")
    sms_username: str = Field(default="", validation_alias="SMS_USERNAME")
    sms_password: str = Field(default="", validation_alias="SMS_PASSWORD")
    sms_api_key: str = Field(default="", validation_alias="SMS_API_KEY")
    sms_sender_number: str = Field(default="", validation_alias="SMS_SENDER_NUMBER")
    sms_body_id: str = Field(default="", validation_alias="SMS_BODY_ID")
    sms_is_flash: bool = Field(default=False, validation_alias="SMS_IS_FLASH")
    sms_timeout: float = Field(default=20.0, validation_alias="SMS_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            mode=self.sms_mode,
            base_url=self.sms_base_url,
            username=self.sms_username,
            password=self.sms_password,
            api_key=self.sms_api_key,
            sender_number=self.sms_sender_number,
            body_id=self.sms_body_id,
            is_flash=self.sms_is_flash,
            timeout=self.sms_timeout,
        )


def get_settings() -> Settings:
    return Settings()
