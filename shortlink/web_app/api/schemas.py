"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten")
    code: Optional[str] = Field(None, description="Optional custom short code (at least 8 characters)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "code": "myrepo01"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"short_url": "https://short.link/abc123"}
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Link store status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
