"""
Sheet API Backend

Serves the sheets of a Google spreadsheet as a JSON/JSONP API:
1. Catch-all route with every unprotected sheet and a change hash
2. Poll route that only sends data when the hash changed
3. Per-sheet GET/PUT/POST/DELETE for users listed in the apiusers sheet
4. Docs template to PDF export
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sheet_api.config import LOG_LEVEL
from sheet_api.routes import documents, gateway

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Sheet API",
    description="JSON/JSONP API over Google Sheets data",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(documents.router)
app.include_router(gateway.router)


@app.get("/health")
def health():
    return {"status": "ok"}
