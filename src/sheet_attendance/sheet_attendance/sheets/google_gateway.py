from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

import gspread
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from ..core.exceptions import ConfigurationError, UpstreamAuthError, UpstreamError
from .errors import error_for_status

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

TOKEN_URI = "https://oauth2.googleapis.com/token"

_UPDATED_ROW = re.compile(r"![A-Z]+(\d+)")


def build_credentials(
    *,
    info: Optional[Dict[str, Any]] = None,
    client_email: Optional[str] = None,
    private_key: Optional[str] = None,
) -> Credentials:
    """Service-account credentials from a full JSON key or from email + PEM key."""
    if info is None:
        if not client_email or not private_key:
            raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY are required")
        info = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": TOKEN_URI,
        }
    try:
        return Credentials.from_service_account_info(info, scopes=SCOPES)
    except Exception as e:
        # Usually a PEM key with literal "\n" or spaces instead of line breaks.
        raise ConfigurationError(f"Invalid Google service account key: {type(e).__name__}") from e


class GoogleSheetsGateway:
    """SheetGateway over gspread.

    The spreadsheet handle and worksheet handles are opened lazily and
    memoised; concurrent first calls may open them twice, which is harmless.
    """

    def __init__(self, credentials: Credentials, spreadsheet_id: str, *, client: Optional[gspread.Client] = None):
        self._credentials = credentials
        self._spreadsheet_id = spreadsheet_id
        self._client = client
        self._book: Optional[gspread.Spreadsheet] = None
        self._worksheets: Dict[str, gspread.Worksheet] = {}

    def _spreadsheet(self) -> gspread.Spreadsheet:
        if self._book is None:
            if self._client is None:
                self._client = gspread.authorize(self._credentials)
            self._book = self._client.open_by_key(self._spreadsheet_id)
            logger.info("Google spreadsheet opened: %s", self._book.title)
        return self._book

    def _ws(self, sheet: str) -> Optional[gspread.Worksheet]:
        ws = self._worksheets.get(sheet)
        if ws is None:
            try:
                ws = self._spreadsheet().worksheet(sheet)
            except gspread.exceptions.WorksheetNotFound:
                return None
            self._worksheets[sheet] = ws
        return ws

    def _call(self, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except gspread.exceptions.APIError as e:
            status = getattr(getattr(e, "response", None), "status_code", None) or 500
            raise error_for_status(int(status), f"Google Sheets API error ({status})") from e
        except GoogleAuthError as e:
            raise UpstreamAuthError("Google authentication failed") from e
        except gspread.exceptions.SpreadsheetNotFound as e:
            raise error_for_status(404, "Spreadsheet not found") from e

    def read_all_rows(self, sheet: str) -> List[List[Any]]:
        ws = self._call(self._ws, sheet)
        if ws is None:
            return []
        return self._call(ws.get_all_values)

    def append_row(self, sheet: str, row: Sequence[Any]) -> int:
        ws = self._call(self._ws, sheet)
        if ws is None:
            raise UpstreamError(f'Sheet "{sheet}" not found', status_code=404)
        response = self._call(ws.append_row, list(row), value_input_option="RAW", table_range="A1")
        updated = ((response or {}).get("updates") or {}).get("updatedRange", "")
        m = _UPDATED_ROW.search(updated)
        return int(m.group(1)) if m else 0

    def write_cell(self, sheet: str, address: str, value: Any) -> None:
        ws = self._call(self._ws, sheet)
        if ws is None:
            raise UpstreamError(f'Sheet "{sheet}" not found', status_code=404)
        self._call(ws.update_acell, address, value)
