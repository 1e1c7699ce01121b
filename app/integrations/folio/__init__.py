"""Folio SMS integration."""

from integrations.folio.client import FolioSmsClient

__all__ = ["FolioSmsClient"]
