from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..core.exceptions import ConfigurationError
from .base import SheetGateway
from .google_gateway import GoogleSheetsGateway, build_credentials
from .graph_gateway import GraphSession, GraphWorkbookGateway

logger = logging.getLogger(__name__)

GOOGLE = "google"
GRAPH = "graph"


@dataclass(frozen=True)
class SheetsConfig:
    backend: str
    sheet_id: str = ""
    google_service_account_email: str = ""
    google_private_key: str = ""
    google_credentials_json: str = ""
    ms_client_id: str = ""
    ms_tenant_id: str = ""
    ms_client_secret: str = ""
    ms_share_url: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SheetsConfig":
        fields = cls.__dataclass_fields__
        return cls(**{k: str(v or "") for k, v in data.items() if k in fields})

    def missing(self) -> list[str]:
        """Names of environment variables the selected backend still needs."""
        if self.backend == GRAPH:
            required = {
                "MS_CLIENT_ID": self.ms_client_id,
                "MS_TENANT_ID": self.ms_tenant_id,
                "MS_CLIENT_SECRET": self.ms_client_secret,
                "MS_SHARE_URL": self.ms_share_url,
            }
        elif self.backend == GOOGLE:
            required = {"SHEET_ID": self.sheet_id}
            if not self.google_credentials_json:
                required["GOOGLE_SERVICE_ACCOUNT_EMAIL"] = self.google_service_account_email
                required["GOOGLE_PRIVATE_KEY"] = self.google_private_key
        else:
            raise ConfigurationError(f"Unknown SHEETS_BACKEND: {self.backend!r} (expected 'google' or 'graph')")
        return [name for name, value in required.items() if not value]

    def validate(self) -> None:
        missing = self.missing()
        if missing:
            raise ConfigurationError("Missing required settings: " + ", ".join(missing))


def build_gateway(config: SheetsConfig) -> SheetGateway:
    """Create the gateway for the configured backend; fails fast on bad settings."""
    config.validate()

    if config.backend == GRAPH:
        session = GraphSession(
            client_id=config.ms_client_id,
            tenant_id=config.ms_tenant_id,
            client_secret=config.ms_client_secret,
            share_url=config.ms_share_url,
        )
        logger.info("Using Excel workbook via Microsoft Graph")
        return GraphWorkbookGateway(session)

    if config.google_credentials_json:
        try:
            info = json.loads(config.google_credentials_json)
        except ValueError as e:
            raise ConfigurationError("GOOGLE_CREDENTIALS_JSON is not valid JSON") from e
        credentials = build_credentials(info=info)
    else:
        credentials = build_credentials(
            client_email=config.google_service_account_email,
            private_key=config.google_private_key,
        )
    logger.info("Using Google spreadsheet %s", config.sheet_id)
    return GoogleSheetsGateway(credentials, config.sheet_id)
