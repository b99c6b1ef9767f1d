"""
API response models.
"""

from pydantic import BaseModel, Field


class Book(BaseModel):
    """
    API representation of a Book entity.

    Maps from the domain Book entity for API responses.
    """

    pk: int = Field(description="Primary key assigned by the catalog")
    title: str = Field(description="Book title")
    author: str = Field(description="Author as reported by the classification service")
    classification: str = Field(default="", description="Dewey-decimal-like classification code")
    external_id: str = Field(default="", description="Work identifier in the classification service")
    owner: str | None = Field(default=None, description="Owning user (multi-user deployments)")


class SearchResult(BaseModel):
    """
    A work found by a title search, not yet on the shelf.
    """

    title: str = Field(description="Work title")
    author: str = Field(description="Author string")
    year: str = Field(description="Year of first publication, may be empty")
    external_id: str = Field(description="Identifier to pass to PUT /books")
