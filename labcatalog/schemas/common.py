from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Bounds of the INTEGER columns ids and display orders are stored in
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None
    message: str | None = None
    error: str | None = None
    count: int | None = None

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler):
        # Absent envelope keys are omitted; nulls inside ``data`` are kept
        return {k: v for k, v in handler(self).items() if v is not None}


class RefOut(CamelModel):
    id: int
    name: str
