# gesem/api/notifications/main.py
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.base_service import clamp_per_page, page_meta
from ...services.notification_service import NotificationService
from ..clients.main import get_today
from .models import AlertPage, NotificationLog, NotificationSend

router = APIRouter()


def get_notification_service(session: Session = Depends(get_sync_session)) -> NotificationService:
    return NotificationService(session)


@router.get("/notifications/alerts", response_model=AlertPage)
def api_list_alerts(
    page: int = Query(1, ge=1),
    per_page: int = 15,
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    """Clientes por vencer (4 días) o vencidos, paginados con total aparte."""
    per_page = clamp_per_page(per_page)
    alerts, total = service.list_alerts(current_user.id, today, page, per_page)
    return {"data": alerts, "meta": page_meta(total, page, per_page)}


@router.post(
    "/notifications/send", response_model=NotificationLog, status_code=status.HTTP_201_CREATED
)
def api_send_notification(
    data: NotificationSend,
    request: Request,
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    """
    Genera el mensaje y el enlace de WhatsApp/SMS y deja registro del aviso.
    El envío lo hace el navegador abriendo `link`.
    """
    try:
        result = service.send(
            current_user.id,
            data.client_id,
            data.channel,
            status=data.status,
            message=data.message,
            today=today,
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    log = result["log"]
    log_action(
        "NOTIFY",
        "client",
        str(log.client_id),
        user=current_user,
        request=request,
        details={"channel": log.channel, "log_id": log.id},
    )
    return {**log.model_dump(), "link": result["link"]}
