"""Success envelope shared by every endpoint: {success, statusCode, message, data}."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response wrapper. Errors use the same shape with success=false."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    status_code: int = Field(default=200, alias="statusCode")
    message: str = "OK"
    data: DataT | None = None


def ok(data: Any = None, message: str = "OK", status_code: int = 200) -> ApiResponse[Any]:
    """Build a success envelope."""
    return ApiResponse[Any](status_code=status_code, message=message, data=data)


class PageMeta(BaseModel):
    """Paging information returned with list endpoints."""

    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=-(-total // limit) if limit else 0)
