"""
Movie Entity
"""

from typing import List, Optional

from sqlmodel import JSON, Column, Field, SQLModel


class Movie(SQLModel, table=True):
    """
    Movie entity - a catalog entry with a poster image.

    Business Rules:
    - Title, director, studio and poster are required
    - Poster holds the stored file name, not a URL
    """

    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)

    title: str = Field(max_length=200)
    director: str = Field(max_length=255)
    studio: str = Field(max_length=255)
    movie_cast: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    release_year: int
    poster: str = Field(max_length=500)
