# learnify/schemas/base.py
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    success: bool = True
    message: str
    data: Optional[T] = None
    total: Optional[int] = None
    errors: Optional[List[Any]] = None

    def model_post_init(self, __context: Any) -> None:
        # routes render with exclude_unset; success is always on the wire
        self.__pydantic_fields_set__.add("success")
