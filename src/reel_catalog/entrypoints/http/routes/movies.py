from fastapi import APIRouter, Depends, Response, status

from reel_catalog.entrypoints.http.dependencies import (
    get_create_movie_use_case,
    get_delete_movie_use_case,
    get_get_movie_use_case,
    get_list_movies_use_case,
    get_update_movie_use_case,
)
from reel_catalog.entrypoints.http.dtos.movies import (
    MessageResponseDTO,
    MovieInputDTO,
    MovieListResponseDTO,
    MovieResponseDTO,
    MoviesQueryDTO,
)
from reel_catalog.entrypoints.http.error_responses import ErrorResponse
from reel_catalog.entrypoints.http.mappers.movie_mapper import MovieMapper
from reel_catalog.use_cases.create_movie import CreateMovie
from reel_catalog.use_cases.delete_movie import DeleteMovie, DeleteMovieRequest
from reel_catalog.use_cases.get_movie import GetMovie, GetMovieRequest
from reel_catalog.use_cases.list_movies import ListMovies
from reel_catalog.use_cases.update_movie import UpdateMovie


router = APIRouter(tags=["Movies"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Movie not found or malformed id"}}
_INVALID = {422: {"model": ErrorResponse, "description": "Validation error"}}


@router.get(
    "/movies",
    response_model=MovieListResponseDTO,
    summary="List movies",
    description="""
    List movies with optional full-text search, sorting and pagination.

    ## Search
    - `title` and `genres` are combined into one whole-word, case-insensitive search
    - A movie matches when any search word appears in its title or genres

    ## Sorting
    - One of `id`, `title`, `year`, `runtime`; prefix with `-` for descending

    ## Pagination
    - Default page size: 20
    - Max page size: 100

    ## Example
    ```
    GET /v1/movies?title=matrix&genres=sci-fi&sort=-year&page=1&page_size=10
    ```
    """,
    responses=_INVALID,
)
def list_movies(
    query: MoviesQueryDTO = Depends(),
    use_case: ListMovies = Depends(get_list_movies_use_case),
) -> MovieListResponseDTO:
    """List movies endpoint following parse → execute → map → return pattern."""
    request = MovieMapper.to_list_request(query)
    result = use_case.execute(request)
    return MovieMapper.to_list_response(result)


@router.post(
    "/movies",
    response_model=MovieResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a movie",
    responses=_INVALID,
)
def create_movie(
    body: MovieInputDTO,
    response: Response,
    use_case: CreateMovie = Depends(get_create_movie_use_case),
) -> MovieResponseDTO:
    result = use_case.execute(MovieMapper.to_create_request(body))

    response.headers["Location"] = f"/v1/movies/{result.movie.id}"
    return MovieMapper.to_movie_response(result.movie)


@router.get(
    "/movies/{movie_id}",
    response_model=MovieResponseDTO,
    summary="Get a movie",
    responses=_NOT_FOUND,
)
def show_movie(
    movie_id: str,
    use_case: GetMovie = Depends(get_get_movie_use_case),
) -> MovieResponseDTO:
    result = use_case.execute(GetMovieRequest(movie_id=movie_id))
    return MovieMapper.to_movie_response(result.movie)


@router.put(
    "/movies/{movie_id}",
    response_model=MovieResponseDTO,
    summary="Replace a movie",
    responses={**_NOT_FOUND, **_INVALID},
)
def update_movie(
    movie_id: str,
    body: MovieInputDTO,
    use_case: UpdateMovie = Depends(get_update_movie_use_case),
) -> MovieResponseDTO:
    result = use_case.execute(MovieMapper.to_update_request(movie_id, body))
    return MovieMapper.to_movie_response(result.movie)


@router.delete(
    "/movies/{movie_id}",
    response_model=MessageResponseDTO,
    summary="Delete a movie",
    responses=_NOT_FOUND,
)
def delete_movie(
    movie_id: str,
    use_case: DeleteMovie = Depends(get_delete_movie_use_case),
) -> MessageResponseDTO:
    use_case.execute(DeleteMovieRequest(movie_id=movie_id))
    return MessageResponseDTO(message="movie successfully deleted")
