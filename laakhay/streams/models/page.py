"""Pagination window models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class Page(BaseModel):
    """Pagination directives: skip ``skip`` items, take ``limit``, out of ``total``."""

    skip: int = Field(0, ge=0)
    limit: int = Field(0, ge=0)
    total: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_window(self) -> Page:
        """Validate the window fits inside total."""
        if self.skip + self.limit > self.total:
            raise ValueError("skip + limit must be <= total")
        return self

    model_config = ConfigDict(frozen=True)


class Paged(BaseModel, Generic[T]):
    """A value together with the page it was produced or consumed under."""

    page: Page
    value: T

    @property
    def skip(self) -> int:
        return self.page.skip

    @property
    def limit(self) -> int:
        return self.page.limit

    @property
    def total(self) -> int:
        return self.page.total

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
