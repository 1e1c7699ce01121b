"""Folio SMS integration settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings


class FolioSettings(IntegrationSettings):
    """Folio SMS gateway configuration.

    Environment Variables:
        FOLIO_BASE_URL: Folio API base URL (``send`` is resolved against it)
        FOLIO_API_KEY: Value of the ``FOLIOMEDIAN_API_KEY`` header
    """

    base_url: str | None = Field(default=None, alias="FOLIO_BASE_URL")
    api_key: str | None = Field(default=None, alias="FOLIO_API_KEY")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Folio BaseUrl must be a valid http(s) URL."""
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"FOLIO_BASE_URL must be a valid URL: {v}")
        return v

    def validate_configured(self) -> None:
        self.require("base_url", "api_key")
