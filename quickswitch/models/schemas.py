"""
Goal: Pydantic models for request/response shapes across the API.
We keep them boring on purpose so they're stable contracts.
"""
from typing import List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    name: str
    version: str
    port: int


class ItemOut(BaseModel):
    """Transport shape of an Item; `type` is "window" or "chrome_tab"."""
    id: str
    title: str
    subtitle: str
    type: str


class ItemsResponse(BaseModel):
    items: List[ItemOut] = []
    query: str = ""
    captured_at: Optional[float] = None


class ActivateRequest(BaseModel):
    type: str
    id: str


class CloseTabRequest(BaseModel):
    id: str


class OkResponse(BaseModel):
    ok: bool
    error: Optional[str] = None


class RefreshResult(BaseModel):
    success: bool
    timestamp: Optional[float] = None
    error: Optional[str] = None


class BrowserStatus(BaseModel):
    available: bool
    endpoint: str
