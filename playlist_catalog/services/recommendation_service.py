"""Playlist recommendations behind a swappable ranking strategy.

``KeywordRecommender`` scores playlists locally by keyword overlap and is
always available. ``LLMRecommender`` asks a chat model through LiteLLM
(any provider LiteLLM supports, e.g. OpenRouter) and degrades to the
keyword scorer on any failure: recommendations are a convenience, so a
broken upstream never turns into an error for the caller.
"""

import json
import logging
import random
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.config import Settings, settings
from ..exceptions import UpstreamUnavailableError
from ..models.playlist import Playlist
from ..repositories.playlist_repository import PlaylistRepository

DEFAULT_LIMIT = 3

# Score weights for the keyword strategy.
KEYWORD_HIT = 1
NAME_CONTAINS_QUERY = 3
TAG_HIT = 2

NO_PLAYLISTS_EXPLANATION = "No playlists available for recommendations."
NO_MATCH_EXPLANATION = (
    "I couldn't find exact matches for your request, so here are some "
    "popular playlists from your collection:"
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")

logger = logging.getLogger(__name__)


def match_explanation(query: str) -> str:
    return f'Based on your request "{query}", here are some playlists that might interest you:'


@dataclass
class Recommendation:
    playlist: Playlist
    reason: Optional[str] = None


@dataclass
class RecommendationResult:
    explanation: str
    recommendations: List[Recommendation] = field(default_factory=list)


class Recommender(ABC):
    """Ranking capability: pick the best playlists for a free-text request."""

    name: str = "base"

    @abstractmethod
    def rank(self, query: str, candidates: Sequence[Playlist]) -> RecommendationResult:
        """Return an ordered shortlist drawn from *candidates*."""


# ---------------------------------------------------------------------------
# Local keyword strategy
# ---------------------------------------------------------------------------

def tokenize(query: str) -> List[str]:
    return query.lower().split()


def score_playlist(query: str, playlist: Playlist) -> int:
    """Keyword-overlap score of *playlist* for *query*.

    +1 per keyword found anywhere in name/description/tags, +3 when the
    whole query appears in the name, +2 per tag containing any keyword.
    """
    keywords = tokenize(query)
    tags = list(playlist.tags or [])
    searchable = " ".join([playlist.name or "", playlist.description or "", " ".join(tags)]).lower()

    score = sum(KEYWORD_HIT for kw in keywords if kw in searchable)
    if query.lower() in (playlist.name or "").lower():
        score += NAME_CONTAINS_QUERY
    for tag in tags:
        tag_lower = tag.lower()
        if any(kw in tag_lower for kw in keywords):
            score += TAG_HIT
    return score


class KeywordRecommender(Recommender):
    """Deterministic for matching queries; random sample when nothing matches."""

    name = "local"

    def __init__(self, limit: int = DEFAULT_LIMIT, rng: Optional[random.Random] = None):
        self.limit = limit
        self.rng = rng or random.Random()

    def rank(self, query: str, candidates: Sequence[Playlist]) -> RecommendationResult:
        if not candidates:
            return RecommendationResult(explanation=NO_PLAYLISTS_EXPLANATION)

        scored = [(score_playlist(query, p), p) for p in candidates]
        # sorted() is stable, so equal scores keep catalog order.
        ranked = sorted((item for item in scored if item[0] > 0), key=lambda item: -item[0])

        if not ranked:
            sample = self.rng.sample(list(candidates), min(self.limit, len(candidates)))
            return RecommendationResult(
                explanation=NO_MATCH_EXPLANATION,
                recommendations=[Recommendation(playlist=p) for p in sample],
            )

        keywords = tokenize(query)
        recommendations = []
        for score, playlist in ranked[: self.limit]:
            searchable = " ".join(
                [playlist.name or "", playlist.description or "", " ".join(playlist.tags or [])]
            ).lower()
            hits = [kw for kw in keywords if kw in searchable]
            reason = f"Matches: {', '.join(hits)}" if hits else None
            recommendations.append(Recommendation(playlist=playlist, reason=reason))

        return RecommendationResult(
            explanation=match_explanation(query),
            recommendations=recommendations,
        )


# ---------------------------------------------------------------------------
# LLM strategy
# ---------------------------------------------------------------------------

SYSTEM_PROMPT_TEMPLATE = (
    "You are a music recommendation AI. You have access to a collection of playlists "
    "with their names, descriptions, and tags. Based on the user's request, recommend "
    "2-3 playlists from the available collection that best match their needs.\n\n"
    "Available playlists:\n{catalog}\n\n"
    "Respond with a JSON object in this exact format:\n"
    '{{"explanation": "Brief explanation of why these playlists match the request", '
    '"recommendations": [{{"id": playlist_id, "name": "playlist_name", '
    '"reason": "why this playlist fits the request"}}]}}'
)


def describe_catalog(candidates: Sequence[Playlist]) -> str:
    lines = []
    for p in candidates:
        tags = ", ".join(p.tags or []) or "None"
        lines.append(f'- ID:{p.id} "{p.name}": {p.description or "No description"} [Tags: {tags}]')
    return "\n".join(lines)


def parse_llm_response(content: str, candidates: Sequence[Playlist], limit: int) -> RecommendationResult:
    """Turn the model's JSON answer into a result over known playlists.

    Raises UpstreamUnavailableError when the answer is not usable.
    """
    cleaned = _CODE_FENCE.sub("", content.strip())
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise UpstreamUnavailableError(f"Unparseable model response: {e}", backend="llm") from e

    if not isinstance(parsed, dict):
        raise UpstreamUnavailableError("Model response is not a JSON object", backend="llm")

    by_id = {p.id: p for p in candidates}
    recommendations: List[Recommendation] = []
    for item in parsed.get("recommendations") or []:
        if not isinstance(item, dict):
            continue
        try:
            playlist = by_id.get(int(item.get("id")))
        except (TypeError, ValueError):
            continue
        if playlist is None or any(r.playlist.id == playlist.id for r in recommendations):
            continue
        recommendations.append(Recommendation(playlist=playlist, reason=item.get("reason")))

    if not recommendations:
        raise UpstreamUnavailableError("Model recommended no known playlists", backend="llm")

    explanation = parsed.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = "Here are some playlists that might interest you:"
    return RecommendationResult(explanation=explanation, recommendations=recommendations[:limit])


class LLMRecommender(Recommender):
    """Chat-model ranking with a wall-clock timeout and local fallback."""

    name = "llm"

    def __init__(
        self,
        model: str,
        fallback: Recommender,
        api_key: str = "",
        api_base: str = "",
        timeout: float = 15.0,
        limit: int = DEFAULT_LIMIT,
    ):
        self.model = model
        self.fallback = fallback
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout
        self.limit = limit

    def rank(self, query: str, candidates: Sequence[Playlist]) -> RecommendationResult:
        if not candidates:
            return RecommendationResult(explanation=NO_PLAYLISTS_EXPLANATION)

        try:
            content = self._complete(query, candidates)
            return parse_llm_response(content, candidates, self.limit)
        except UpstreamUnavailableError as e:
            logger.warning("LLM recommendation unusable, using keyword scorer: %s", e.message)
        except Exception:
            logger.exception("LLM recommendation call failed, using keyword scorer")
        return self.fallback.rank(query, candidates)

    def _complete(self, query: str, candidates: Sequence[Playlist]) -> str:
        import litellm

        kwargs: dict = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT_TEMPLATE.format(catalog=describe_catalog(candidates)),
                },
                {"role": "user", "content": query},
            ],
            "max_tokens": 1000,
            "temperature": 0.7,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        response = litellm.completion(**kwargs)
        content = response.choices[0].message.content
        if not content:
            raise UpstreamUnavailableError("Empty response from model", backend="llm")
        return content


def build_recommender(config: Settings = settings, rng: Optional[random.Random] = None) -> Recommender:
    """Pick the strategy named by configuration."""
    local = KeywordRecommender(limit=config.recommendation_limit, rng=rng)
    if not config.llm_recommendations_configured():
        return local
    return LLMRecommender(
        model=config.recommendation_model,
        fallback=local,
        api_key=config.recommendation_api_key,
        api_base=config.recommendation_api_base,
        timeout=config.recommendation_timeout,
        limit=config.recommendation_limit,
    )


class RecommendationService:
    """Runs the configured recommender over the current catalog."""

    def __init__(self, db: Session, recommender: Optional[Recommender] = None):
        self.db = db
        self.playlist_repo = PlaylistRepository(db)
        self.recommender = recommender or build_recommender()

    def recommend(self, query: str) -> RecommendationResult:
        playlists = self.playlist_repo.get_all()
        result = self.recommender.rank(query, playlists)
        logger.info(
            "Recommendations served",
            extra={
                "backend": self.recommender.name,
                "candidates": len(playlists),
                "returned": len(result.recommendations),
            },
        )
        return result
