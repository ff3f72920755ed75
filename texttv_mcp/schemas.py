"""Pydantic input models for the Text-TV tools."""

from typing import Annotated, Literal, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from texttv_mcp.config import PAGE_MAX, PAGE_MIN
from texttv_mcp.errors import InputValidationError

PageNumber = Annotated[
    int,
    Field(ge=PAGE_MIN, le=PAGE_MAX, description=f"Text-TV page number ({PAGE_MIN}-{PAGE_MAX})"),
]
IncludePlainText = Annotated[
    bool,
    Field(description="Include plain text content without HTML formatting"),
]
NewsCategory = Literal["main", "domestic", "foreign"]
SportsCategory = Literal["main", "football", "hockey", "results"]
WeatherRegion = Literal["national", "stockholm", "gothenburg", "malmo"]
TVChannel = Literal["svt1", "svt2", "both"]
TextTVCategory = Literal["news", "sports", "weather", "tv_schedule", "other"]


class GetPageInput(BaseModel):
    page: PageNumber
    include_plain_text: IncludePlainText = False


class GetSubpagesInput(BaseModel):
    page: PageNumber
    include_plain_text: IncludePlainText = False


class GetNewsInput(BaseModel):
    category: NewsCategory = "main"
    include_plain_text: IncludePlainText = False


class GetSportsInput(BaseModel):
    category: SportsCategory = "main"
    include_plain_text: IncludePlainText = False


class GetWeatherInput(BaseModel):
    region: WeatherRegion = "national"
    include_plain_text: IncludePlainText = False


class GetTVScheduleInput(BaseModel):
    channel: TVChannel = "both"
    include_plain_text: IncludePlainText = False


class SearchInput(BaseModel):
    query: str = Field(min_length=1, max_length=100, description="Search query string")
    category: TextTVCategory | None = None
    max_results: int = Field(default=10, ge=1, le=50)
    include_plain_text: IncludePlainText = False


class BrowseCategoryInput(BaseModel):
    category: TextTVCategory
    include_content: bool = Field(default=False, description="Include page content (slower, more data)")
    limit: int = Field(default=20, ge=1, le=100)


M = TypeVar("M", bound=BaseModel)


def validate_input(model: type[M], data: dict | None) -> M:
    """Parse tool arguments, raising InputValidationError with a readable message."""
    try:
        return model.model_validate(data or {})
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in e.errors()
        )
        raise InputValidationError(f"Invalid input: {problems}") from e
