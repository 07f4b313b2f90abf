from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Insert, Select, Table, Update, insert, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from cartelera.core.db import Database
from cartelera.schemas.listing import ListingCreate, ListingFields


log = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "Error de base de datos"


def mutable_values(fields: ListingFields) -> dict[str, Any]:
    """All seven mutable columns by key; anything not sent is bound as NULL (full replace)."""
    return {
        "title": fields.title,
        "year": fields.year,
        "genre": fields.genre,
        "poster_url": fields.poster_url,
        "active": fields.active,
        "description": fields.description,
        "location": fields.location,
    }


def build_select_all(table: Table) -> Select:
    return select(table)


def build_insert(table: Table, payload: ListingCreate) -> Insert:
    return insert(table).values(id=payload.id, **mutable_values(payload))


def build_update(table: Table, listing_id: str, fields: ListingFields) -> Update:
    return update(table).where(table.c.id == listing_id).values(**mutable_values(fields))


def store_error_message(exc: Exception, *, expose: bool) -> str:
    """
    Text to put in msgRespuesta for a store failure.
    The driver's own message when exposed, a fixed one otherwise.
    """
    if not expose:
        return STORE_ERROR_MESSAGE
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


async def list_listings(database: Database) -> list[dict[str, Any]]:
    """Every row as a dict keyed by column key (id, title, ..., poster_url, ...)."""
    table = database.listings
    async with database.session() as db:
        result = await db.execute(build_select_all(table))
        return [{c.key: row._mapping[c] for c in table.c} for row in result]


async def create_listing(database: Database, payload: ListingCreate) -> None:
    async with database.session() as db:
        try:
            await db.execute(build_insert(database.listings, payload))
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            raise

    log.info("listing created id=%s", payload.id)


async def update_listing(database: Database, listing_id: str, fields: ListingFields) -> int:
    """Returns the affected-row count; 0 means no listing has that id."""
    async with database.session() as db:
        try:
            result = await db.execute(build_update(database.listings, listing_id, fields))
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            raise

    log.info("listing update id=%s rows=%s", listing_id, result.rowcount)
    return result.rowcount
