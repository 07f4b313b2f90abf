from fastapi.responses import JSONResponse

from cartelera.schemas.common import Envelope


def envelope(status_code: int, message: str) -> JSONResponse:
    body = Envelope(codError=str(status_code), msgRespuesta=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def documented(status_code: int, description: str, message: str | None = None) -> dict:
    """OpenAPI `responses` entry for an envelope answer."""
    entry: dict = {"model": Envelope, "description": description}
    if message is not None:
        entry["content"] = {"application/json": {"example": {"codError": str(status_code), "msgRespuesta": message}}}
    return entry
