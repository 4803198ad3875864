"""
Content Page Editor - Data Models

Pydantic models for the records exchanged with the remote content API.
Wire names are camelCase (``createdAt``); Python attributes are snake_case.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Content(BaseModel):
    """A single page as returned by the content API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    title: Optional[str] = None
    body: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    @property
    def display_title(self) -> str:
        """Title used in the sidebar listing."""
        return self.title or f"ページ {self.id}"


class CreateContentDTO(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        # Only fields the caller actually set go over the wire
        return self.model_dump(exclude_unset=True)


class UpdateContentDTO(CreateContentDTO):
    pass
