import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cartelera.api.responses import documented, envelope
from cartelera.core.db import CONNECTION_ERRORS, Database, StoreUnavailableError, get_database
from cartelera.schemas.listing import ListingCreate, ListingOut, ListingUpdate
from cartelera.services.listings import create_listing, list_listings, store_error_message, update_listing


log = logging.getLogger(__name__)
router = APIRouter()

MISSING_KEY_FIELDS = "Faltan campos clave (imdbID, Title, Year)"
MISSING_QUERY_KEY = "Falta parámetro 'imdbID' en QueryString"
NOT_FOUND = "Registro no encontrado"
INSERTED = "Registro Insertado"
UPDATED = "Registro actualizado correctamente"


def _failure(request: Request, status_code: int, exc: Exception) -> JSONResponse:
    return envelope(status_code, store_error_message(exc, expose=request.app.state.settings.expose_store_errors))


@router.get(
    "/listings",
    response_model=list[ListingOut],
    summary="List every listing",
    responses={500: documented(500, "Store or connection error")},
)
async def get_listings(request: Request, database: Database = Depends(get_database)):
    try:
        rows = await list_listings(database)
    except (SQLAlchemyError, StoreUnavailableError, *CONNECTION_ERRORS) as e:
        log.exception("list listings failed")
        return _failure(request, 500, e)

    return [
        ListingOut(
            id=r["id"],
            title=r["title"],
            year=r["year"],
            type=r["genre"],
            posterUrl=r["poster_url"],
            active=r["active"],
            description=r["description"],
            location=r["location"],
        )
        for r in rows
    ]


@router.post(
    "/listings",
    status_code=201,
    summary="Insert a new listing",
    responses={
        201: documented(201, "Listing inserted", INSERTED),
        400: documented(400, "Missing key fields or rejected by the store (e.g. duplicate id)", MISSING_KEY_FIELDS),
        500: documented(500, "Store unavailable"),
    },
)
async def post_listing(
    request: Request,
    payload: ListingCreate | None = None,
    database: Database = Depends(get_database),
) -> JSONResponse:
    if payload is None or not payload.has_key_fields():
        return envelope(400, MISSING_KEY_FIELDS)

    try:
        await create_listing(database, payload)
    except (StoreUnavailableError, *CONNECTION_ERRORS) as e:
        log.exception("create listing failed, store unreachable id=%s", payload.id)
        return _failure(request, 500, e)
    except SQLAlchemyError as e:
        # duplicate primary key lands here too
        log.exception("create listing failed id=%s", payload.id)
        return _failure(request, 400, e)

    return envelope(201, INSERTED)


@router.put(
    "/listings",
    summary="Replace the mutable fields of a listing",
    responses={
        200: documented(200, "Listing updated", UPDATED),
        400: documented(400, "Missing id in the query string or rejected by the store", MISSING_QUERY_KEY),
        404: documented(404, "No listing has that id", NOT_FOUND),
        500: documented(500, "Store unavailable"),
    },
)
async def put_listing(
    request: Request,
    payload: ListingUpdate | None = None,
    listing_id: str | None = Query(default=None, alias="id", description="id of the listing to update"),
    imdb_id: str | None = Query(default=None, alias="imdbID", include_in_schema=False),
    database: Database = Depends(get_database),
) -> JSONResponse:
    key = listing_id or imdb_id
    if not key:
        return envelope(400, MISSING_QUERY_KEY)

    try:
        rows_affected = await update_listing(database, key, payload or ListingUpdate())
    except (StoreUnavailableError, *CONNECTION_ERRORS) as e:
        log.exception("update listing failed, store unreachable id=%s", key)
        return _failure(request, 500, e)
    except SQLAlchemyError as e:
        log.exception("update listing failed id=%s", key)
        return _failure(request, 400, e)

    if rows_affected == 0:
        return envelope(404, NOT_FOUND)

    return envelope(200, UPDATED)
