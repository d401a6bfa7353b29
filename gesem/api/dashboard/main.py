# gesem/api/dashboard/main.py
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from ...core.constants import IncomePeriod
from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.dashboard_service import DashboardService
from ..clients.main import get_today
from .models import DashboardData

router = APIRouter()


def get_dashboard_service(session: Session = Depends(get_sync_session)) -> DashboardService:
    return DashboardService(session)


@router.get("/dashboard", response_model=DashboardData)
def api_get_dashboard(
    period: IncomePeriod = IncomePeriod.MONTHLY,
    alerts_page: int = Query(1, ge=1),
    alerts_per_page: int = Query(10, ge=1, le=50),
    service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    """
    Contadores por estado (sobre todos los clientes), ingresos del periodo,
    alertas paginadas con su total, clientes recientes y notas.
    """
    return service.get_dashboard(
        current_user.id,
        today=today,
        period=period,
        alerts_page=alerts_page,
        alerts_per_page=alerts_per_page,
    )
