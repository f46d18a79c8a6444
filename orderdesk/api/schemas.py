"""
Pydantic schemas for API request/response validation.
"""

from typing import Literal

from pydantic import BaseModel


class StatusUpdate(BaseModel):
    """Request to change an order's status."""
    status: Literal['pending', 'dispatch', 'success']


class StatusUpdateResponse(BaseModel):
    id: str
    status: str


class TaskResponse(BaseModel):
    """Generic task response."""
    success: bool
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    project_id: str
    dataset: str
