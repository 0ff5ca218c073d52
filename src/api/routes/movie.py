from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.poster_store import IPosterStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Principal
from src.app.use_cases.movies import (
    DeleteMovieResponse,
    MovieCatalogUseCase,
    MovieCommand,
    MoviePageResponse,
    MovieResponse,
    PosterUpload,
)
from src.domain.result import Error
from src.depends import (
    get_current_account,
    get_poster_store,
    get_unit_of_work,
    require_admin,
)

router = APIRouter(prefix="/movie", tags=["Movies"])

BAD_REQUEST_ERRORS = (
    "EMPTY_FILE",
    "UNSUPPORTED_FILE_TYPE",
    "INVALID_FILE_NAME",
    "INVALID_SORT_FIELD",
    "INVALID_PAGE",
)


def raise_for_error(error: Error):
    if error.code == "MOVIE_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in BAD_REQUEST_ERRORS:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


def parse_movie(movie: str) -> MovieCommand:
    """The movie part of the multipart body is a JSON string"""
    try:
        return MovieCommand.model_validate_json(movie)
    except ValidationError as e:
        raise ClientError(
            Error("INVALID_MOVIE", f"Invalid movie payload: {e.error_count()} error(s)"),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )


async def read_upload(file: Optional[UploadFile]) -> Optional[PosterUpload]:
    if file is None:
        return None
    return PosterUpload(
        filename=file.filename or "",
        content_type=file.content_type,
        data=await file.read(),
    )


def catalog(uow: UnitOfWork, poster_store: IPosterStore) -> MovieCatalogUseCase:
    return MovieCatalogUseCase(uow, poster_store, ApplicationConfig.BASE_URL)


@router.post(
    "/add-movie", status_code=status.HTTP_201_CREATED, response_model=MovieResponse
)
async def add_movie(
    file: UploadFile = File(...),
    movie: str = Form(...),
    _admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """
    Add a movie with its poster (ADMIN only).

    Multipart body: `file` (png, jpeg or gif) and `movie` (JSON string).

    Raises:
        - 400 Bad Request: Empty or unsupported poster file
        - 401 Unauthorized / 403 Forbidden: Not an authenticated ADMIN
        - 422 Unprocessable Entity: Invalid movie JSON
    """
    command = parse_movie(movie)
    result = await catalog(uow, poster_store).add(command, await read_upload(file))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/all", status_code=status.HTTP_200_OK, response_model=List[MovieResponse])
async def get_all_movies(
    _principal: Principal = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    result = await catalog(uow, poster_store).list_all()

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/allMoviesPage", status_code=status.HTTP_200_OK, response_model=MoviePageResponse
)
async def get_movies_page(
    page_number: int = Query(0, alias="pageNumber", ge=0),
    page_size: int = Query(10, alias="pageSize", ge=1),
    _principal: Principal = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """One page of movies, 0-based page numbers"""
    result = await catalog(uow, poster_store).list_page(page_number, page_size)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/allMoviesPageSort", status_code=status.HTTP_200_OK, response_model=MoviePageResponse
)
async def get_movies_page_sorted(
    page_number: int = Query(0, alias="pageNumber", ge=0),
    page_size: int = Query(10, alias="pageSize", ge=1),
    sort_by: str = Query("title", alias="sortBy"),
    direction: str = Query("asc", alias="dir"),
    _principal: Principal = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """
    One sorted page of movies.

    sortBy: title, director, studio or releaseYear. dir: asc, anything else is descending.
    """
    result = await catalog(uow, poster_store).list_page_sorted(
        page_number, page_size, sort_by, direction
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/update/{movie_id}", status_code=status.HTTP_200_OK, response_model=MovieResponse
)
async def update_movie(
    movie_id: int,
    movie: str = Form(...),
    file: Optional[UploadFile] = File(None),
    _admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    """
    Update a movie (ADMIN only); a new poster file replaces the old one.

    Raises:
        - 404 Not Found: No movie with this id
    """
    command = parse_movie(movie)
    result = await catalog(uow, poster_store).update(
        movie_id, command, await read_upload(file)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/delete/{movie_id}", status_code=status.HTTP_200_OK, response_model=DeleteMovieResponse
)
async def delete_movie(
    movie_id: int,
    _admin: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    result = await catalog(uow, poster_store).delete(movie_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


# Declared last so the fixed paths above are matched first
@router.get("/{movie_id}", status_code=status.HTTP_200_OK, response_model=MovieResponse)
async def get_movie(
    movie_id: int,
    _principal: Principal = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    poster_store: IPosterStore = Depends(get_poster_store),
):
    result = await catalog(uow, poster_store).get(movie_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
