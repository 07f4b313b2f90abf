from cartelera.models.base import Base  # noqa: F401

from cartelera.models.listing import Listing  # noqa: F401
