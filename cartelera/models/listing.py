from sqlalchemy import Boolean, Column, MetaData, String, Table, Text

from cartelera.core.config import settings
from cartelera.models.base import Base


def listings_table(name: str, metadata: MetaData | None = None) -> Table:
    """
    The cartelera table under `name`.
    Column names match the existing table; keys are the API names.
    """
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("imdbID", String(50), key="id", primary_key=True),
        Column("Title", String(255), key="title", nullable=False),
        Column("Year", String(10), key="year", nullable=False),
        Column("Type", String(50), key="genre", nullable=True),
        Column("Poster", String(500), key="poster_url", nullable=True),
        # True = currently showing
        Column("Estado", Boolean, key="active", nullable=True),
        Column("description", Text, key="description", nullable=True),
        Column("Ubication", String(100), key="location", nullable=True),
    )


class Listing(Base):
    # metadata used by migrations; requests go through Database.listings, built from the app's settings
    __table__ = listings_table(settings.listings_table, Base.metadata)
