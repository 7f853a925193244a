from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from reel_catalog.domain.movie import parse_runtime


class MovieInputDTO(BaseModel):
    """Request body for creating or replacing a movie.

    Missing fields fall back to zero values so the domain Validator reports
    them as "must be provided" alongside every other failure.
    """

    title: str = Field(default="", examples=["Deadpool"])
    # JSON numbers only; "2016" as a string is rejected
    year: StrictInt = Field(default=0, examples=[2016])
    runtime: int = Field(
        default=0,
        description="Runtime in the form '<minutes> mins'",
        examples=["108 mins"],
    )
    genres: list[str] | None = Field(default=None, examples=[["action", "comedy"]])

    model_config = ConfigDict(extra="forbid")

    @field_validator("runtime", mode="before")
    @classmethod
    def parse_runtime_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_runtime(value)
        raise ValueError("runtime must be a string of the form '<minutes> mins'")


class MovieResponseDTO(BaseModel):
    id: str
    title: str
    year: int
    runtime: str
    genres: list[str]


class MoviesQueryDTO(BaseModel):
    """Query parameters for listing movies.

    Range and safelist checks on page, page_size and sort happen in the
    ListMovies use case so failures come back as field errors.
    """

    title: str = Field(
        default="",
        description="Full-text search on title",
        examples=["matrix"],
    )
    genres: str = Field(
        default="",
        description="Comma-separated genres to search for",
        examples=["action,sci-fi"],
    )
    page: int = Field(default=1, description="Page number (1-indexed)", examples=[1])
    page_size: int = Field(default=20, description="Movies per page (max 100)", examples=[20])
    sort: str = Field(
        default="id",
        description="Sort key; prefix with '-' for descending",
        examples=["-year"],
    )


class MetadataDTO(BaseModel):
    current_page: int
    page_size: int
    first_page: int
    last_page: int
    total_records: int


class MovieListResponseDTO(BaseModel):
    movies: list[MovieResponseDTO]
    metadata: MetadataDTO


class MessageResponseDTO(BaseModel):
    message: str
