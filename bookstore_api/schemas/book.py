from pydantic import Field, ConfigDict, ValidationInfo, field_validator
from typing import ClassVar
from decimal import Decimal

from bookstore_api.schemas.base import INT32_MAX, INT32_MIN, ApiModel, require_text

# Book base schema; numeric fields match the column types
class BookBase(ApiModel):
    title: str
    year: int | None = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    isbn: str
    image: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    author_id: int | None = Field(default=None, ge=INT32_MIN, le=INT32_MAX)

    @field_validator("title", "isbn", mode="before")
    @classmethod
    def trim_and_check(cls, v: object, info: ValidationInfo) -> object:
        return require_text(v, info.field_name or "value")

# Book create schema
class BookCreate(BookBase):
    pass

# Book update schema (full replace)
class BookUpdate(BookBase):
    id: int = Field(ge=INT32_MIN, le=INT32_MAX)

# Book read schema, no nested author
class BookSummary(BookBase):
    id: int

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)
