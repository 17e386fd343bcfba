from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from typing import ClassVar

from bookstore_api.schemas.base import INT32_MAX, INT32_MIN, ApiModel, require_text

# Author base schema
class AuthorBase(ApiModel):
    first_name: str
    last_name: str
    bio: str | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object, info: ValidationInfo) -> object:
        return require_text(v, info.field_name or "value")

# Author create schema
class AuthorCreate(AuthorBase):
    pass

# Author update schema (full replace)
class AuthorUpdate(AuthorBase):
    id: int = Field(ge=INT32_MIN, le=INT32_MAX)

# Author read schema, no nested books
class AuthorSummary(AuthorBase):
    id: int

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)
