"""
Movie Catalog DTOs
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MovieCommand(BaseModel):
    """Movie fields supplied by the client on add and update"""

    title: str = Field(min_length=1, max_length=200)
    director: str = Field(min_length=1, max_length=255)
    studio: str = Field(min_length=1, max_length=255)
    movie_cast: List[str] = Field(default_factory=list)
    release_year: int


class PosterUpload(BaseModel):
    """Raw poster file as received by the API layer"""

    filename: str
    content_type: Optional[str] = None
    data: bytes


class MovieResponse(BaseModel):
    id: int
    title: str
    director: str
    studio: str
    movie_cast: List[str]
    release_year: int
    poster: str
    poster_url: str


class MoviePageResponse(BaseModel):
    """One page of movies plus paging metadata (page_number is 0-based)"""

    movies: List[MovieResponse]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    is_last: bool


class DeleteMovieResponse(BaseModel):
    message: str
