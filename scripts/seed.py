"""Seed script to populate the catalog with sample movies."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "catalog" / "src"))

from api.schemas import MovieInput  # noqa: E402
from core.database import engine, get_db  # noqa: E402
from core.movie_validation import validate_movie  # noqa: E402
from core.validator import Validator  # noqa: E402
from models import Base  # noqa: E402
from services.movie_store import MovieStore  # noqa: E402

SAMPLE_MOVIES = [
    {"title": "Casablanca", "year": 1942, "runtime": "102 mins", "genres": ["drama", "romance", "war"]},
    {"title": "Inception", "year": 2010, "runtime": "148 mins", "genres": ["action", "sci-fi"]},
    {"title": "Parasite", "year": 2019, "runtime": "132 mins", "genres": ["thriller", "drama", "comedy"]},
    {"title": "Dune", "year": 2021, "runtime": "155 mins", "genres": ["sci-fi", "adventure"]},
    {"title": "The Breakfast Club", "year": 1985, "runtime": "96 mins", "genres": ["drama", "comedy"]},
]


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    inserted = []
    async with get_db() as db:
        store = MovieStore(db)
        for data in SAMPLE_MOVIES:
            movie = MovieInput.model_validate(data).to_movie()
            v = Validator()
            validate_movie(v, movie)
            if not v.valid():
                print(f"  skipping {data['title']}: {v.errors}")
                continue
            inserted.append(await store.insert(movie))

    await engine.dispose()
    print("Database seeded with sample data!")
    for movie in inserted:
        print(f"  #{movie.id} {movie.title} ({movie.year})")


if __name__ == "__main__":
    asyncio.run(seed())
