"""
Service instances for the routes.

Settings and the store adapter are memoized for the life of the process.
The cache, and the workbook built on it, are fresh for every request so
a read never outlives the request that made it. Tests swap any of these
via `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Depends

from sheet_api import config
from sheet_api.services.cache import Cache
from sheet_api.services.router import Router, build_router
from sheet_api.services.sheets import GoogleSheetStore
from sheet_api.services.workbook import Workbook


@lru_cache
def get_settings() -> config.ApiSettings:
    return config.load_settings()


def get_cache() -> Cache:
    return Cache()


@lru_cache
def get_sheet_store() -> GoogleSheetStore:
    return GoogleSheetStore(config.SPREADSHEET_ID)


def get_workbook(
    store: GoogleSheetStore = Depends(get_sheet_store),
    cache: Cache = Depends(get_cache),
    settings: config.ApiSettings = Depends(get_settings),
) -> Workbook:
    return Workbook(store, cache, protected_sheets=settings.protected_sheets)


def get_router(
    workbook: Workbook = Depends(get_workbook),
    settings: config.ApiSettings = Depends(get_settings),
) -> Router:
    return build_router(workbook, settings)
