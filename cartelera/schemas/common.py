from pydantic import BaseModel


class Envelope(BaseModel):
    """Status body returned by every non-list response."""

    codError: str
    msgRespuesta: str
