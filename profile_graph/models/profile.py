"""
Profile Input Model
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProfileInput(BaseModel):
    """Professional profile a knowledge graph is generated for.

    Title, location and company are required and must not be blank; a
    ValidationError is raised before any scraping or generation happens.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    title: str
    location: str
    company: str
    age: Optional[int] = Field(default=None, gt=0)
    additional_context: Optional[List[str]] = None

    @field_validator("title", "location", "company")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Please provide title, location, and company")
        return v

    @field_validator("additional_context")
    @classmethod
    def drop_blank_context(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Drop blank context entries; an all-blank list means no context."""
        if v is None:
            return None
        filtered = [ctx.strip() for ctx in v if ctx.strip()]
        return filtered or None
