from __future__ import annotations

import base64
import logging
import time
from typing import Any, Callable, List, Optional, Sequence, Tuple
from urllib.parse import quote

import msal
import requests

from ..core.exceptions import UpstreamAuthError, UpstreamError
from .base import row_range
from .errors import error_for_status

logger = logging.getLogger(__name__)

GRAPH_ROOT = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]

# Refresh the token when less than this many seconds of validity remain.
TOKEN_REFRESH_MARGIN = 60


def share_id(share_url: str) -> str:
    """Encode a OneDrive/SharePoint share link as a Graph ``shares`` id."""
    encoded = base64.urlsafe_b64encode(share_url.encode("utf-8")).decode("ascii").rstrip("=")
    return f"u!{encoded}"


class GraphSession:
    """Authenticated access to one shared workbook through Microsoft Graph.

    Holds the client-credentials token and the resolved drive/item ids. Both
    are filled lazily and only ever replaced on expiry; concurrent callers may
    fetch them twice, which costs an extra request and nothing else.
    """

    def __init__(
        self,
        *,
        client_id: str,
        tenant_id: str,
        client_secret: str,
        share_url: str,
        app: Optional[msal.ConfidentialClientApplication] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._client_id = client_id
        self._tenant_id = tenant_id
        self._client_secret = client_secret
        self._app = app
        self._share_url = share_url
        self._http = http or requests.Session()
        self._timeout = timeout
        self._clock = clock

        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._drive_item: Optional[Tuple[str, str]] = None

    def _msal_app(self) -> msal.ConfidentialClientApplication:
        # Built on first use: msal contacts the authority while constructing.
        if self._app is None:
            self._app = msal.ConfidentialClientApplication(
                self._client_id,
                authority=f"https://login.microsoftonline.com/{self._tenant_id}",
                client_credential=self._client_secret,
            )
        return self._app

    def token(self) -> str:
        now = self._clock()
        if self._token and self._token_expires_at > now + TOKEN_REFRESH_MARGIN:
            return self._token

        try:
            result = self._msal_app().acquire_token_for_client(scopes=GRAPH_SCOPES)
        except (ValueError, requests.RequestException) as e:
            # Unknown tenant or unreachable authority.
            raise UpstreamAuthError(f"Token acquisition failed: {type(e).__name__}") from e
        if not result or "access_token" not in result:
            error = (result or {}).get("error", "unknown_error")
            logger.error("Microsoft token acquisition failed: %s", error)
            raise UpstreamAuthError(f"Token acquisition failed: {error}")

        self._token = result["access_token"]
        self._token_expires_at = now + float(result.get("expires_in") or 3600)
        return self._token

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        headers["Authorization"] = f"Bearer {self.token()}"
        try:
            return self._http.request(method, url, headers=headers, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise UpstreamError(f"Microsoft Graph request failed: {type(e).__name__}") from e

    def drive_item(self) -> Tuple[str, str]:
        if self._drive_item:
            return self._drive_item

        resp = self.request("GET", f"{GRAPH_ROOT}/shares/{share_id(self._share_url)}/driveItem")
        if not resp.ok:
            raise error_for_status(resp.status_code, f"Excel workbook is not accessible ({resp.status_code})")

        data = resp.json()
        drive_id = (data.get("parentReference") or {}).get("driveId")
        item_id = data.get("id")
        if not drive_id or not item_id:
            raise UpstreamError("Could not resolve driveId/itemId for the shared workbook")

        logger.info("Excel workbook resolved: drive=%s item=%s", drive_id, item_id)
        self._drive_item = (drive_id, item_id)
        return self._drive_item

    def worksheets_url(self) -> str:
        drive_id, item_id = self.drive_item()
        return f"{GRAPH_ROOT}/drives/{drive_id}/items/{item_id}/workbook/worksheets"


class GraphWorkbookGateway:
    """SheetGateway over the Excel REST API of Microsoft Graph."""

    def __init__(self, session: GraphSession):
        self._session = session

    def _sheet_url(self, sheet: str) -> str:
        return f"{self._session.worksheets_url()}/{quote(sheet, safe='')}"

    def _used_range(self, sheet: str) -> Optional[dict]:
        resp = self._session.request("GET", f"{self._sheet_url(sheet)}/usedRange")
        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise error_for_status(resp.status_code, f'Reading sheet "{sheet}" failed ({resp.status_code})')
        return resp.json()

    def _patch_range(self, sheet: str, address: str, values: List[List[Any]]) -> None:
        resp = self._session.request(
            "PATCH",
            f"{self._sheet_url(sheet)}/range(address='{address}')",
            json={"values": values},
        )
        if not resp.ok:
            raise error_for_status(resp.status_code, f'Writing {sheet}!{address} failed ({resp.status_code})')

    def read_all_rows(self, sheet: str) -> List[List[Any]]:
        data = self._used_range(sheet)
        if data is None:
            return []
        return data.get("values") or []

    def append_row(self, sheet: str, row: Sequence[Any]) -> int:
        # Graph has no append for plain ranges: write just below usedRange.
        used = self._used_range(sheet)
        row_number = int((used or {}).get("rowCount") or 0) + 1
        address = row_range(row_number, len(row))
        self._patch_range(sheet, address, [list(row)])
        return row_number

    def write_cell(self, sheet: str, address: str, value: Any) -> None:
        self._patch_range(sheet, address, [[value]])
