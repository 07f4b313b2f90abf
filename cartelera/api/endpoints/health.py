from fastapi import APIRouter, Depends

from cartelera.core.db import Database, get_database

router = APIRouter()


@router.get("/health")
async def health(database: Database = Depends(get_database)) -> dict:
    return {"status": "ok", "database": database.state}
