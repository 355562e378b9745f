from models.base import Base
from models.movie import Movie

__all__ = ["Base", "Movie"]
