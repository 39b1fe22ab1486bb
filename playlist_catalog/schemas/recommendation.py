"""Recommendation request/response schemas."""

from typing import List, Optional

from pydantic import BaseModel, field_validator

from .playlist import PlaylistResponse


class RecommendationRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query is required")
        return v


class RecommendedPlaylist(PlaylistResponse):
    """A playlist plus the recommender's reason for picking it, if it gave one."""
    reason: Optional[str] = None


class RecommendationResponse(BaseModel):
    explanation: str
    recommendations: List[RecommendedPlaylist] = []
