"""Shared base classes and utilities for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class IntegrationSettings(BaseSettings):
    """Base class for external provider settings.

    All provider settings should inherit from this class to ensure
    consistent configuration behavior (env file loading, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    def missing_fields(self, *names: str) -> list[str]:
        """Return the environment variable names of unset required fields.

        Args:
            *names: Field names that must be set for the provider to work

        Returns:
            Aliases (env var names) of the fields that are empty
        """
        missing = []
        for name in names:
            if not getattr(self, name):
                field = type(self).model_fields[name]
                missing.append(field.alias or name)
        return missing

    def require(self, *names: str) -> None:
        """Fail fast when a provider is wired without its settings.

        Raises:
            ValueError: Naming every missing environment variable
        """
        missing = self.missing_fields(*names)
        if missing:
            raise ValueError(
                f"{type(self).__name__} is missing required settings: "
                f"{', '.join(missing)}"
            )


class InfrastructureSettings(BaseSettings):
    """Base class for infrastructure-level settings.

    Infrastructure settings control core system behavior like retry logic
    and the fire-and-forget queue.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
