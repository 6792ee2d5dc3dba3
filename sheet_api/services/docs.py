"""
Google Docs templating service.

Copies a Docs template, replaces `%key%` placeholders with values,
exports the filled copy as a PDF into Drive and trashes the copy.
"""

import io
import logging
import math
import re
from typing import Any, Optional

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from sheet_api.config import get_google_credentials

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
]

PDF_MIME_TYPE = "application/pdf"


def _get_docs_service():
    return build("docs", "v1", credentials=get_google_credentials(SCOPES), cache_discovery=False)


def _get_drive_service():
    return build("drive", "v3", credentials=get_google_credentials(SCOPES), cache_discovery=False)


def extract_doc_id(url_or_id: str) -> str:
    """
    Extract the Google Doc ID from a URL or return as-is if already an ID.
    """
    match = re.search(r"/document/d/([a-zA-Z0-9_-]+)", url_or_id)
    if match:
        return match.group(1)
    return url_or_id.strip()


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _number_text(number: float) -> str:
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return repr(number)


def format_value(value: Any, truncate: bool = False) -> str:
    """
    Text substituted for a placeholder.

    With `truncate`, numbers (and numeric strings) are rounded to two
    decimals. Whole numbers print without a fractional part.
    """
    number = _as_number(value)
    if truncate and number is not None and math.isfinite(number):
        # Half-up rounding, not round()'s half-to-even.
        return _number_text(math.floor(number * 100 + 0.5) / 100)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return _number_text(float(value))
    return str(value)


def build_replace_requests(values: dict[str, Any], truncate: bool = False) -> list[dict]:
    return [
        {
            "replaceAllText": {
                "containsText": {"text": f"%{key}%", "matchCase": True},
                "replaceText": format_value(value, truncate),
            }
        }
        for key, value in values.items()
    ]


def make_pdf_from_template(
    template_id: str,
    pdf_name: str,
    values: Any,
    truncate: bool = False,
    docs_service=None,
    drive_service=None,
) -> Optional[dict[str, Any]]:
    """
    Fill a Docs template and save it to Drive as a PDF.

    Returns the new file's id, name and webViewLink, or None when
    `values` is not a mapping.
    """
    if not isinstance(values, dict):
        logger.warning("Improper PDF template values: %s", type(values).__name__)
        return None

    docs_service = docs_service or _get_docs_service()
    drive_service = drive_service or _get_drive_service()

    copy = drive_service.files().copy(
        fileId=extract_doc_id(template_id), fields="id,name"
    ).execute()
    copy_id = copy["id"]

    requests = build_replace_requests(values, truncate)
    if requests:
        docs_service.documents().batchUpdate(
            documentId=copy_id, body={"requests": requests}
        ).execute()

    pdf_bytes = drive_service.files().export(
        fileId=copy_id, mimeType=PDF_MIME_TYPE
    ).execute()

    name = pdf_name if pdf_name != "" else f"{copy['name']}.pdf"
    media = MediaIoBaseUpload(io.BytesIO(pdf_bytes), mimetype=PDF_MIME_TYPE)
    new_file = drive_service.files().create(
        body={"name": name, "mimeType": PDF_MIME_TYPE},
        media_body=media,
        fields="id,name,webViewLink",
    ).execute()

    # Trash the temporary Docs copy
    drive_service.files().update(fileId=copy_id, body={"trashed": True}).execute()

    logger.info(
        "Created PDF '%s' (%s) from template %s",
        new_file.get("name"),
        new_file.get("id"),
        template_id,
    )
    return new_file
