# gesem/api/clients/main.py
from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models import Client as ClientModel
from ...models.user import User
from ...services.base_service import clamp_per_page, page_meta
from ...services.billing_status import classify_client
from ...services.client_service import ClientService
from ...utils.dates import local_today
from .models import Client, ClientCreate, ClientPage, ClientUpdate

router = APIRouter()


# --- Dependency Injectors ---
def get_client_service(session: Session = Depends(get_sync_session)) -> ClientService:
    return ClientService(session)


def get_today() -> date:
    return local_today()


def serialize_client(client: ClientModel, today: date) -> Dict[str, Any]:
    """Cliente con su estado calculado al momento de la lectura."""
    state = classify_client(client, today)
    return {
        **client.model_dump(),
        "status": state.status,
        "days_until_due": state.days_until_due,
    }


# --- Client Endpoints ---
@router.get("/clients", response_model=ClientPage)
def api_list_clients(
    search: str = "",
    page: int = Query(1, ge=1),
    per_page: int = 15,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    clients, total = service.list_clients(current_user.id, search, page, per_page)
    per_page = clamp_per_page(per_page)
    return {
        "data": [serialize_client(c, today) for c in clients],
        "meta": page_meta(total, page, per_page),
    }


@router.get("/clients/{client_id}", response_model=Client)
def api_get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    try:
        return serialize_client(service.get_client(current_user.id, client_id), today)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/clients", response_model=Client, status_code=status.HTTP_201_CREATED)
def api_create_client(
    client: ClientCreate,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    try:
        new_client = service.create_client(current_user.id, client.model_dump())
        return serialize_client(new_client, today)
    except ValueError as e:
        if "ya existe" in str(e):
            raise HTTPException(status_code=409, detail=str(e))
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/clients/{client_id}", response_model=Client)
def api_update_client(
    client_id: int,
    client_update: ClientUpdate,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    update_fields = client_update.model_dump(exclude_unset=True)
    try:
        updated = service.update_client(current_user.id, client_id, update_fields)
        return serialize_client(updated, today)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        if "ya existe" in str(e):
            raise HTTPException(status_code=409, detail=str(e))
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/clients/{client_id}")
def api_delete_client(
    client_id: int,
    request: Request,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
):
    try:
        service.delete_client(current_user.id, client_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    log_action("DELETE", "client", str(client_id), user=current_user, request=request)
    return {"message": "Cliente eliminado correctamente."}


@router.patch("/clients/{client_id}/toggle-service", response_model=Client)
def api_toggle_client_service(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(current_active_user),
    today: date = Depends(get_today),
):
    try:
        return serialize_client(service.toggle_service(current_user.id, client_id), today)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
