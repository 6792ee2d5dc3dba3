import os
from dataclasses import dataclass

from dotenv import load_dotenv
from google.oauth2 import service_account

load_dotenv()


def _env_list(name: str, default: str = "") -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


SPREADSHEET_ID = os.getenv("SPREADSHEET_ID")

API_USERS_SHEET = "apiusers"
PROTECTED_SHEETS = _env_list("PROTECTED_SHEETS", "users,roles")
API_SHEETS = _env_list("API_SHEETS")
POST_LOOKUP_SHEET = os.getenv("POST_LOOKUP_SHEET", "users")
CORRECTED_PAGING = _env_flag("CORRECTED_PAGING")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# GCP credentials – either individual env vars (Vercel) or a JSON key file (local)
GCP_CLIENT_EMAIL = os.getenv("GCP_CLIENT_EMAIL")
GCP_PRIVATE_KEY = os.getenv("GCP_PRIVATE_KEY")
GCP_PROJECT_ID = os.getenv("GCP_PROJECT_ID")
GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "service-account.json")


@dataclass(frozen=True)
class ApiSettings:
    """Behavioural settings handed to the sheet services."""

    protected_sheets: frozenset[str] = frozenset({"users", "roles", API_USERS_SHEET})
    api_sheets: tuple[str, ...] = ()
    post_lookup_sheet: str = "users"
    corrected_paging: bool = False
    api_users_sheet: str = API_USERS_SHEET


def load_settings() -> ApiSettings:
    # The API user sheet is always protected, whatever PROTECTED_SHEETS says.
    return ApiSettings(
        protected_sheets=frozenset(PROTECTED_SHEETS) | {API_USERS_SHEET},
        api_sheets=tuple(API_SHEETS),
        post_lookup_sheet=POST_LOOKUP_SHEET,
        corrected_paging=CORRECTED_PAGING,
    )


def get_google_credentials(scopes: list[str]) -> service_account.Credentials:
    """Build Google service-account credentials.

    Prefers individual env vars (GCP_CLIENT_EMAIL, GCP_PRIVATE_KEY,
    GCP_PROJECT_ID) which work on Vercel.  Falls back to a local JSON
    key file for development.
    """
    if GCP_CLIENT_EMAIL and GCP_PRIVATE_KEY and GCP_PROJECT_ID:
        # Normalise the private key: strip wrapping quotes, convert literal
        # "\n" sequences to real newlines, and trim whitespace.
        pk = GCP_PRIVATE_KEY.strip()
        if pk.startswith('"') and pk.endswith('"'):
            pk = pk[1:-1]
        pk = pk.replace("\\n", "\n")
        info = {
            "type": "service_account",
            "project_id": GCP_PROJECT_ID,
            "client_email": GCP_CLIENT_EMAIL,
            "private_key": pk,
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)

    return service_account.Credentials.from_service_account_file(
        GOOGLE_SERVICE_ACCOUNT_FILE, scopes=scopes
    )
