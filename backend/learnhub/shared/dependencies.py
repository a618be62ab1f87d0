"""Application-scoped objects exposed as FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from learnhub.config import Settings
from learnhub.storage import JsonStore


def get_store(request: Request) -> JsonStore:
    """Return the store created for this application instance."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


Store = Annotated[JsonStore, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
