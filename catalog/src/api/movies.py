import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.helpers import read_csv, read_id_param, read_int, read_json, read_string
from api.schemas import MovieInput, MoviePatch, serialize_movie
from core.database import get_db
from core.errors import ValidationFailure
from core.filters import MOVIE_SORT_SAFELIST, Filters, validate_filters
from core.movie_validation import validate_movie
from core.validator import Validator
from services.movie_store import MovieStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/movies")


@router.post("")
async def create_movie(request: Request):
    payload = await read_json(request, MovieInput)
    movie = payload.to_movie()

    v = Validator()
    validate_movie(v, movie)
    if not v.valid():
        raise ValidationFailure(v.errors)

    async with get_db() as db:
        await MovieStore(db).insert(movie)

    logger.info("Created movie %s (%s)", movie.id, movie.title)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"movie": serialize_movie(movie)},
        headers={"Location": f"/v1/movies/{movie.id}"},
    )


@router.get("")
async def list_movies(request: Request):
    query = request.query_params
    v = Validator()

    title = read_string(query, "title", "")
    genres = read_csv(query, "genres", [])
    filters = Filters(
        page=read_int(query, "page", 1, v),
        page_size=read_int(query, "page_size", 20, v),
        sort=read_string(query, "sort", "id"),
        sort_safelist=MOVIE_SORT_SAFELIST,
    )

    validate_filters(v, filters)
    if not v.valid():
        raise ValidationFailure(v.errors)

    async with get_db() as db:
        movies, metadata = await MovieStore(db).get_all(title, genres, filters)

    return {"movies": [serialize_movie(m) for m in movies], "metadata": metadata}


@router.get("/{movie_id}")
async def show_movie(movie_id: str):
    movie_id = read_id_param(movie_id)
    async with get_db() as db:
        movie = await MovieStore(db).get(movie_id)
    return {"movie": serialize_movie(movie)}


@router.patch("/{movie_id}")
async def update_movie(movie_id: str, request: Request):
    movie_id = read_id_param(movie_id)

    async with get_db() as db:
        store = MovieStore(db)
        movie = await store.get(movie_id)

        patch = await read_json(request, MoviePatch)
        patch.apply_to(movie)

        v = Validator()
        validate_movie(v, movie)
        if not v.valid():
            raise ValidationFailure(v.errors)

        await store.update(movie)

    logger.info("Updated movie %s to version %s", movie.id, movie.version)
    return {"movie": serialize_movie(movie)}


@router.delete("/{movie_id}")
async def delete_movie(movie_id: str):
    movie_id = read_id_param(movie_id)
    async with get_db() as db:
        await MovieStore(db).delete(movie_id)
    logger.info("Deleted movie %s", movie_id)
    return {"message": "movie successfully deleted"}
