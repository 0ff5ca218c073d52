"""
Movie Catalog Use Case

CRUD, paging and sorting over movies, with poster files kept in the poster store.
"""

import logging
import math
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.poster_store import IPosterStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Movie
from src.domain.result import Error, Result, Return
from .dtos import (
    DeleteMovieResponse,
    MovieCommand,
    MoviePageResponse,
    MovieResponse,
    PosterUpload,
)

logger = logging.getLogger(__name__)

# Public sort key -> column
SORT_FIELDS = {
    "title": "title",
    "director": "director",
    "studio": "studio",
    "releaseYear": "release_year",
    "release_year": "release_year",
}


class MovieCatalogUseCase:
    """
    Use case for the movie catalog.

    Business Rules:
    - Adding a movie requires a non-empty poster file
    - poster_url is BASE_URL + "/file/" + stored poster name
    - Updating with a new poster stores it; the old file is deleted after commit
    - Deleting a movie deletes its poster file after the row is gone
    - A failed database write removes the poster file it just stored
    - Pages are 0-based; sort keys limited to SORT_FIELDS
    - Direction "asc" (any case) sorts ascending, anything else descending
    """

    def __init__(self, uow: UnitOfWork, poster_store: IPosterStore, base_url: str):
        self.uow = uow
        self.poster_store = poster_store
        self.base_url = base_url.rstrip("/")

    def _to_response(self, movie: Movie) -> MovieResponse:
        return MovieResponse(
            id=movie.id,
            title=movie.title,
            director=movie.director,
            studio=movie.studio,
            movie_cast=list(movie.movie_cast or []),
            release_year=movie.release_year,
            poster=movie.poster,
            poster_url=f"{self.base_url}/file/{movie.poster}",
        )

    async def _store_poster(self, upload: Optional[PosterUpload]) -> Result[str]:
        if upload is None or not upload.data:
            return Return.err(Error("EMPTY_FILE", "File cannot be null or empty"))
        return await self.poster_store.save(
            upload.filename, upload.content_type or "", upload.data
        )

    async def add(
        self, command: MovieCommand, upload: Optional[PosterUpload]
    ) -> Result[MovieResponse]:
        stored = await self._store_poster(upload)
        if stored.is_err():
            return stored

        try:
            async with self.uow:
                movie = Movie(
                    title=command.title,
                    director=command.director,
                    studio=command.studio,
                    movie_cast=list(command.movie_cast),
                    release_year=command.release_year,
                    poster=stored.value,
                )
                movie = await self.uow.movies.create(movie)
                await self.uow.commit()
        except SQLAlchemyError:
            await self.poster_store.delete(stored.value)
            raise

        logger.info(f"Movie added: {movie.id}")
        return Return.ok(self._to_response(movie))

    async def get(self, movie_id: int) -> Result[MovieResponse]:
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(
                    Error("MOVIE_NOT_FOUND", f"Movie not found with id = {movie_id}")
                )
            return Return.ok(self._to_response(movie))

    async def list_all(self) -> Result[List[MovieResponse]]:
        async with self.uow:
            movies = await self.uow.movies.list_all()
            return Return.ok([self._to_response(m) for m in movies])

    async def update(
        self,
        movie_id: int,
        command: MovieCommand,
        upload: Optional[PosterUpload] = None,
    ) -> Result[MovieResponse]:
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(
                    Error("MOVIE_NOT_FOUND", f"Movie not found with id = {movie_id}")
                )

            old_poster = new_poster = None
            if upload is not None and upload.data:
                stored = await self._store_poster(upload)
                if stored.is_err():
                    return stored
                old_poster, new_poster = movie.poster, stored.value
                movie.poster = new_poster

            movie.title = command.title
            movie.director = command.director
            movie.studio = command.studio
            movie.movie_cast = list(command.movie_cast)
            movie.release_year = command.release_year

            try:
                movie = await self.uow.movies.update(movie)
                await self.uow.commit()
            except SQLAlchemyError:
                if new_poster is not None:
                    await self.poster_store.delete(new_poster)
                raise

            if old_poster is not None:
                await self.poster_store.delete(old_poster)
            logger.info(f"Movie updated: {movie_id}")
            return Return.ok(self._to_response(movie))

    async def delete(self, movie_id: int) -> Result[DeleteMovieResponse]:
        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(
                    Error("MOVIE_NOT_FOUND", f"Movie not found with id = {movie_id}")
                )

            poster = movie.poster
            await self.uow.movies.delete(movie)
            await self.uow.commit()
            await self.poster_store.delete(poster)

            logger.info(f"Movie deleted: {movie_id}")
            return Return.ok(
                DeleteMovieResponse(message=f"Movie deleted with id = {movie_id}")
            )

    async def list_page(self, page_number: int, page_size: int) -> Result[MoviePageResponse]:
        return await self._page(page_number, page_size, None, True)

    async def list_page_sorted(
        self, page_number: int, page_size: int, sort_by: str, direction: str
    ) -> Result[MoviePageResponse]:
        column = SORT_FIELDS.get(sort_by)
        if column is None:
            allowed = ", ".join(k for k in SORT_FIELDS if k != "release_year")
            return Return.err(
                Error(
                    "INVALID_SORT_FIELD",
                    f"Invalid sort field: {sort_by}. Allowed fields are: {allowed}",
                )
            )
        return await self._page(
            page_number, page_size, column, direction.lower() == "asc"
        )

    async def _page(
        self,
        page_number: int,
        page_size: int,
        sort_by: Optional[str],
        ascending: bool,
    ) -> Result[MoviePageResponse]:
        if page_number < 0 or page_size < 1:
            return Return.err(
                Error("INVALID_PAGE", "Page number must be >= 0 and page size >= 1")
            )

        async with self.uow:
            total = await self.uow.movies.count()
            movies = await self.uow.movies.list_page(
                offset=page_number * page_size,
                limit=page_size,
                sort_by=sort_by,
                ascending=ascending,
            )

            total_pages = math.ceil(total / page_size)
            return Return.ok(
                MoviePageResponse(
                    movies=[self._to_response(m) for m in movies],
                    page_number=page_number,
                    page_size=page_size,
                    total_elements=total,
                    total_pages=total_pages,
                    is_last=page_number + 1 >= total_pages,
                )
            )
