from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Movie


class IMovieRepository(ABC):
    """Movie repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Get movie by ID"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Movie]:
        """Get every movie"""
        pass

    @abstractmethod
    async def list_page(
        self,
        offset: int,
        limit: int,
        sort_by: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Movie]:
        """Get one page of movies, optionally ordered by a column"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all movies"""
        pass

    @abstractmethod
    async def create(self, movie: Movie) -> Movie:
        """Create a new movie"""
        pass

    @abstractmethod
    async def update(self, movie: Movie) -> Movie:
        """Update existing movie"""
        pass

    @abstractmethod
    async def delete(self, movie: Movie) -> None:
        """Delete a movie"""
        pass
