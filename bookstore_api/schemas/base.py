from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import ClassVar, Final

# Bounds of the store's 32-bit INTEGER columns
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1


# Wire format is camelCase; snake_case is accepted on input too
class ApiModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def require_text(v: object, field: str) -> object:
    """Trim strings and reject blank ones; non-strings are left to type validation."""
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError(f"{field} cannot be empty")
    return v
