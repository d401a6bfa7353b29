# gesem/api/health.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session

from ..db.engine_sync import get_sync_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def get_system_health(session: Session = Depends(get_sync_session)):
    """Sin autenticación: para el proxy y los chequeos de despliegue."""
    try:
        session.exec(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"Health check: base de datos no disponible: {e}")
        database = "error"
    return {"status": "ok" if database == "ok" else "degraded", "database": database}
