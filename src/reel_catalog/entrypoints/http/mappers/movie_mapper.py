from __future__ import annotations

from reel_catalog.domain.filters import Filters, Metadata
from reel_catalog.domain.movie import Movie, format_runtime
from reel_catalog.entrypoints.http.dtos.movies import (
    MetadataDTO,
    MovieInputDTO,
    MovieListResponseDTO,
    MovieResponseDTO,
    MoviesQueryDTO,
)
from reel_catalog.use_cases.create_movie import CreateMovieRequest
from reel_catalog.use_cases.list_movies import ListMoviesRequest, ListMoviesResponse
from reel_catalog.use_cases.update_movie import UpdateMovieRequest


class MovieMapper:
    """Maps between REST DTOs and domain models for movies."""

    @staticmethod
    def to_create_request(dto: MovieInputDTO) -> CreateMovieRequest:
        return CreateMovieRequest(
            title=dto.title,
            year=dto.year,
            runtime=dto.runtime,
            genres=dto.genres,
        )

    @staticmethod
    def to_update_request(movie_id: str, dto: MovieInputDTO) -> UpdateMovieRequest:
        return UpdateMovieRequest(
            movie_id=movie_id,
            title=dto.title,
            year=dto.year,
            runtime=dto.runtime,
            genres=dto.genres,
        )

    @staticmethod
    def to_genres(csv: str) -> list[str]:
        """
        Split a comma-separated query value into genres.

        Blank entries are dropped, so "" and "," both mean no genre filter.
        """
        return [genre.strip() for genre in csv.split(",") if genre.strip()]

    @staticmethod
    def to_list_request(dto: MoviesQueryDTO) -> ListMoviesRequest:
        return ListMoviesRequest(
            title=dto.title,
            genres=MovieMapper.to_genres(dto.genres),
            filters=Filters(page=dto.page, page_size=dto.page_size, sort=dto.sort),
        )

    @staticmethod
    def to_movie_response(movie: Movie) -> MovieResponseDTO:
        """
        Converts domain Movie entity to REST response DTO.

        Runtime minutes become "<N> mins" at the boundary; created_at and
        version stay internal.
        """
        return MovieResponseDTO(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            runtime=format_runtime(movie.runtime),
            genres=list(movie.genres or []),
        )

    @staticmethod
    def to_metadata_response(metadata: Metadata) -> MetadataDTO:
        return MetadataDTO(
            current_page=metadata.current_page,
            page_size=metadata.page_size,
            first_page=metadata.first_page,
            last_page=metadata.last_page,
            total_records=metadata.total_records,
        )

    @staticmethod
    def to_list_response(result: ListMoviesResponse) -> MovieListResponseDTO:
        return MovieListResponseDTO(
            movies=[MovieMapper.to_movie_response(movie) for movie in result.movies],
            metadata=MovieMapper.to_metadata_response(result.metadata),
        )
