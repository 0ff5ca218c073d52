"""
Movie Catalog Use Cases
"""

from .movie_catalog_use_case import MovieCatalogUseCase, SORT_FIELDS
from .dtos import (
    MovieCommand,
    PosterUpload,
    MovieResponse,
    MoviePageResponse,
    DeleteMovieResponse,
)

__all__ = [
    "MovieCatalogUseCase",
    "SORT_FIELDS",
    "MovieCommand",
    "PosterUpload",
    "MovieResponse",
    "MoviePageResponse",
    "DeleteMovieResponse",
]
