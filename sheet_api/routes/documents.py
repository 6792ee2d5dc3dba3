"""
Document endpoints.

Fills a Google Docs template and exports it to Drive as a PDF.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from googleapiclient.errors import HttpError

from sheet_api.config import ApiSettings
from sheet_api.dependencies import get_settings, get_workbook
from sheet_api.schemas import GatewayRequest, PdfFileResponse, PdfTemplateRequest
from sheet_api.services import auth, docs
from sheet_api.services.workbook import Workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/pdf", response_model=PdfFileResponse)
def create_pdf(
    body: PdfTemplateRequest,
    request: Request,
    workbook: Workbook = Depends(get_workbook),
    settings: ApiSettings = Depends(get_settings),
):
    """
    Create a PDF from a template, replacing each `%key%` with its value.

    Requires `userid` and `userkey` query parameters of an API user.
    """
    gateway_request = GatewayRequest.from_items(request.query_params.multi_items())
    if not auth.authorize(workbook, gateway_request, settings):
        raise HTTPException(status_code=403, detail=auth.AUTH_ERROR["error"])

    try:
        new_file = docs.make_pdf_from_template(
            body.template_id, body.pdf_name, body.values, body.truncate
        )
    except HttpError as e:
        logger.error("PDF creation failed for template %s: %s", body.template_id, e)
        raise HTTPException(status_code=500, detail=f"Failed to create PDF: {e}")

    return new_file
