"""Shared schema base: snake_case in Python, camelCase on the wire."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both ``parent_id`` and ``parentId``; serializes as ``parentId``."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def normalize_tags(tags: Optional[List[str]]):
    """Strip whitespace and drop empty labels. Order and duplicates are kept.

    Non-list input is returned untouched so pydantic reports the type error.
    """
    if tags is None:
        return []
    if not isinstance(tags, list):
        return tags
    cleaned = []
    for tag in tags:
        if isinstance(tag, str):
            tag = tag.strip()
            if not tag:
                continue
        cleaned.append(tag)
    return cleaned
