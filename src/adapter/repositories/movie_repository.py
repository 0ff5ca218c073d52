from typing import List, Optional

from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.movie_repository import IMovieRepository
from src.domain.entities import Movie


class MovieRepository(IMovieRepository):
    """Movie repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Get movie by ID"""
        stmt = select(Movie).where(Movie.id == movie_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[Movie]:
        """Get every movie"""
        stmt = select(Movie).order_by(col(Movie.id))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_page(
        self,
        offset: int,
        limit: int,
        sort_by: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Movie]:
        """
        Get one page of movies.

        sort_by must already be validated against the allowed columns by the
        caller; id is always the tie breaker so pages are stable.
        """
        stmt = select(Movie)
        if sort_by is not None:
            column = col(getattr(Movie, sort_by))
            stmt = stmt.order_by(column.asc() if ascending else column.desc())
        stmt = stmt.order_by(col(Movie.id)).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self) -> int:
        """Count all movies"""
        stmt = select(func.count()).select_from(Movie)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, movie: Movie) -> Movie:
        """Create a new movie"""
        self.session.add(movie)
        await self.session.flush()
        await self.session.refresh(movie)
        return movie

    async def update(self, movie: Movie) -> Movie:
        """Update existing movie"""
        self.session.add(movie)
        await self.session.flush()
        await self.session.refresh(movie)
        return movie

    async def delete(self, movie: Movie) -> None:
        """Delete a movie"""
        await self.session.delete(movie)
        await self.session.flush()
