import os

from .env import env_flag, env_str, normalize_private_key, spreadsheet_id


class Config:
    # Spreadsheet backend: "google" (Sheets API) or "graph" (Excel in OneDrive)
    MS_SHARE_URL = env_str("MS_SHARE_URL")
    SHEETS_BACKEND = env_str("SHEETS_BACKEND", "graph" if MS_SHARE_URL else "google").lower()

    # Google Sheets
    SHEET_ID = spreadsheet_id(os.environ.get("SHEET_ID") or os.environ.get("SHEET_URL"))
    GOOGLE_SERVICE_ACCOUNT_EMAIL = env_str("GOOGLE_SERVICE_ACCOUNT_EMAIL")
    GOOGLE_PRIVATE_KEY = normalize_private_key(os.environ.get("GOOGLE_PRIVATE_KEY"))
    GOOGLE_CREDENTIALS_JSON = env_str("GOOGLE_CREDENTIALS_JSON")

    # Microsoft Graph
    MS_CLIENT_ID = env_str("MS_CLIENT_ID")
    MS_TENANT_ID = env_str("MS_TENANT_ID")
    MS_CLIENT_SECRET = env_str("MS_CLIENT_SECRET")

    PORT = int(os.environ.get("PORT", "3000"))
    TIMEZONE = env_str("TIMEZONE", "Europe/Moscow")

    # The schedule grid exists only in the Excel deployment by default.
    ATTENDANCE_SYNC_ENABLED = env_flag("ATTENDANCE_SYNC_ENABLED", SHEETS_BACKEND == "graph")
    CODE_MARKS_ENABLED = env_flag("CODE_MARKS_ENABLED", False)
    STRICT_FIRST_ACTION = env_flag("STRICT_FIRST_ACTION", False)
    DETACHED_WORKERS = int(os.environ.get("DETACHED_WORKERS", "4"))


SHEETS_CONFIG = {
    "backend": Config.SHEETS_BACKEND,
    "sheet_id": Config.SHEET_ID,
    "google_service_account_email": Config.GOOGLE_SERVICE_ACCOUNT_EMAIL,
    "google_private_key": Config.GOOGLE_PRIVATE_KEY,
    "google_credentials_json": Config.GOOGLE_CREDENTIALS_JSON,
    "ms_client_id": Config.MS_CLIENT_ID,
    "ms_tenant_id": Config.MS_TENANT_ID,
    "ms_client_secret": Config.MS_CLIENT_SECRET,
    "ms_share_url": Config.MS_SHARE_URL,
}

PORT = Config.PORT
TIMEZONE = Config.TIMEZONE
ATTENDANCE_SYNC_ENABLED = Config.ATTENDANCE_SYNC_ENABLED
CODE_MARKS_ENABLED = Config.CODE_MARKS_ENABLED
STRICT_FIRST_ACTION = Config.STRICT_FIRST_ACTION
DETACHED_WORKERS = Config.DETACHED_WORKERS
INLINE_TASKS = False

DEBUG = env_flag("DEBUG", False)
