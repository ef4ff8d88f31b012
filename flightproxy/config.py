# flightproxy/config.py
from typing import List, Literal
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SANDBOX_BASE_URL = "https://test.api.amadeus.com"
PRODUCTION_BASE_URL = "https://api.amadeus.com"


class AmadeusCredentials(BaseModel, frozen=True):
    client_id: str
    client_secret: str
    base_url: str = SANDBOX_BASE_URL


class Settings(BaseSettings):
    # App
    APP_ENV: Literal["dev", "prod", "staging"] = "dev"
    PORT: int = 8787
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Amadeus (AMADEUS_KEY / AMADEUS_SECRET kept for older .env files)
    AMADEUS_CLIENT_ID: str = Field(
        "", validation_alias=AliasChoices("AMADEUS_CLIENT_ID", "AMADEUS_KEY")
    )
    AMADEUS_CLIENT_SECRET: str = Field(
        "", validation_alias=AliasChoices("AMADEUS_CLIENT_SECRET", "AMADEUS_SECRET")
    )
    AMADEUS_ENV: str = "sandbox"  # or "production"
    AMADEUS_CONNECT_TIMEOUT: float = 3.0
    AMADEUS_READ_TIMEOUT: float = 30.0

    # read .env and ignore any extra keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def amadeus_base_url(self) -> str:
        env = self.AMADEUS_ENV.lower().strip()
        return PRODUCTION_BASE_URL if env.startswith("prod") else SANDBOX_BASE_URL

    def amadeus_credentials(self) -> AmadeusCredentials:
        return AmadeusCredentials(
            client_id=self.AMADEUS_CLIENT_ID,
            client_secret=self.AMADEUS_CLIENT_SECRET,
            base_url=self.amadeus_base_url,
        )


settings = Settings()
