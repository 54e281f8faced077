from typing import Any

from pydantic import BaseModel, Field


class ActivityFeed(BaseModel):
    """
    Everything an account has authored, one list per collection.

    Each entry is the stored document with its id under ``id``.
    """

    posts: list[dict[str, Any]] = Field(default_factory=list)
    comments: list[dict[str, Any]] = Field(default_factory=list)
    votes: list[dict[str, Any]] = Field(default_factory=list)
