from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    data: T | None = None
    message: str = "Success"
    success: bool = Field(default=True)

def ok(data=None, message: str = "Success", status_code: int = 200) -> ApiResponse:
    return ApiResponse(status_code=status_code, data=data, message=message, success=status_code < 400)
