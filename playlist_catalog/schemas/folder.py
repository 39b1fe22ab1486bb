"""Folder schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from .base import CamelModel, normalize_tags


class FolderBase(CamelModel):
    """Fields shared by create payloads and responses."""
    name: str
    description: Optional[str] = None
    image_url: str
    parent_id: Optional[int] = None
    tags: List[str] = []

    @field_validator("name", "image_url")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        return normalize_tags(v)


class FolderCreate(FolderBase):
    """Schema for creating a folder.

    ``path`` is derived from the parent chain when omitted.
    """
    path: Optional[str] = None


class FolderUpdate(CamelModel):
    """Partial update. Only fields present in the request body are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[int] = None
    path: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("name", "image_url", "path", "tags")
    @classmethod
    def reject_null(cls, v):
        # Explicit nulls are only meaningful for description and parent_id.
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("name", "image_url")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return normalize_tags(v)


class FolderResponse(FolderBase):
    """Schema for folder responses."""
    id: int
    path: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        return list(v or [])


class FolderDeleteResponse(CamelModel):
    """Result of a folder deletion."""
    id: int
    removed_memberships: int
