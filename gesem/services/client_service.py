# gesem/services/client_service.py
"""
Client service layer using SQLModel ORM.
Directorio de clientes: CRUD, búsqueda paginada y activación manual del servicio.
"""
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from ..models import Client, NotificationLog, Payment
from .base_service import OwnedCRUDService, clamp_per_page

logger = logging.getLogger(__name__)

# Columnas NOT NULL que una edición no puede dejar vacías
REQUIRED_FIELDS = (
    "name",
    "dni",
    "phone",
    "ip",
    "install_date",
    "installer",
    "network_name",
    "network_password",
    "plan",
    "speed",
    "monthly_amount",
    "next_payment_date",
    "is_service_active",
)


class ClientService(OwnedCRUDService[Client]):
    """
    Service layer for Client operations. Every method is scoped to an owner.
    """

    def __init__(self, session: Session):
        super().__init__(session, Client)

    # --- Lecturas ---
    def get_clients_for_owner(self, owner_id: uuid.UUID) -> List[Client]:
        """Todos los clientes del propietario, en orden de alta (id)."""
        statement = select(Client).where(Client.user_id == owner_id).order_by(Client.id)
        return list(self.session.exec(statement).all())

    def list_clients(
        self,
        owner_id: uuid.UUID,
        search: str = "",
        page: int = 1,
        per_page: int = 15,
    ) -> Tuple[List[Client], int]:
        """
        Listado paginado, más recientes primero. `search` busca en nombre,
        DNI o teléfono.

        Returns:
            (clientes de la página, total sin paginar)
        """
        per_page = clamp_per_page(per_page)
        page = max(1, page)
        conditions = [Client.user_id == owner_id]

        search = (search or "").strip()
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    col(Client.name).ilike(pattern),
                    col(Client.dni).ilike(pattern),
                    col(Client.phone).ilike(pattern),
                )
            )

        total = self.session.exec(
            select(func.count()).select_from(Client).where(*conditions)
        ).one()
        statement = (
            select(Client)
            .where(*conditions)
            .order_by(col(Client.id).desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return list(self.session.exec(statement).all()), total

    def get_client(self, owner_id: uuid.UUID, client_id: int) -> Client:
        return self.get_by_id(owner_id, client_id)

    # --- Escrituras ---
    def _ensure_unique_dni(self, owner_id: uuid.UUID, dni: str, exclude_id: int | None = None):
        statement = select(Client.id).where(Client.user_id == owner_id, Client.dni == dni)
        if exclude_id is not None:
            statement = statement.where(Client.id != exclude_id)
        if self.session.exec(statement).first() is not None:
            raise ValueError("Este DNI ya existe para tu cuenta.")

    @staticmethod
    def _ensure_required(data: Dict[str, Any]):
        for field in REQUIRED_FIELDS:
            if field in data and data[field] is None:
                raise ValueError(f"El campo {field} es obligatorio.")

    @staticmethod
    def _ensure_positive_amount(data: Dict[str, Any]):
        amount = data.get("monthly_amount")
        if amount is not None and Decimal(str(amount)) <= 0:
            raise ValueError("El monto debe ser mayor a 0.")

    def create_client(self, owner_id: uuid.UUID, client_data: Dict[str, Any]) -> Client:
        self._ensure_unique_dni(owner_id, client_data["dni"])
        self._ensure_positive_amount(client_data)
        if client_data.get("is_service_active") is None:
            client_data = {**client_data, "is_service_active": True}

        client = self.create(owner_id, client_data)
        logger.info(f"Cliente creado (ID: {client.id}) para el usuario {owner_id}.")
        return client

    def update_client(
        self, owner_id: uuid.UUID, client_id: int, client_update: Dict[str, Any]
    ) -> Client:
        if not client_update:
            raise ValueError("No fields to update provided.")

        client = self.get_by_id(owner_id, client_id)
        self._ensure_required(client_update)
        if "dni" in client_update and client_update["dni"] != client.dni:
            self._ensure_unique_dni(owner_id, client_update["dni"], exclude_id=client_id)
        self._ensure_positive_amount(client_update)

        client_update = {**client_update, "updated_at": datetime.now(timezone.utc)}
        return self.update(owner_id, client_id, client_update)

    def toggle_service(self, owner_id: uuid.UUID, client_id: int) -> Client:
        client = self.get_by_id(owner_id, client_id)
        new_value = not client.is_service_active
        logger.info(
            f"Servicio del cliente {client_id} {'activado' if new_value else 'desactivado'}."
        )
        return self.update(
            owner_id,
            client_id,
            {"is_service_active": new_value, "updated_at": datetime.now(timezone.utc)},
        )

    def delete_client(self, owner_id: uuid.UUID, client_id: int) -> None:
        """Elimina el cliente junto con sus pagos y avisos registrados."""
        client = self.get_by_id(owner_id, client_id)
        try:
            for model in (Payment, NotificationLog):
                children = self.session.exec(select(model).where(model.client_id == client.id))
                for child in children.all():
                    self.session.delete(child)
            # Los hijos deben salir antes que el cliente por las claves foráneas
            self.session.flush()
            self.session.delete(client)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error eliminando cliente {client_id}: {e}")
            raise
        logger.info(f"Cliente {client_id} eliminado con sus pagos y avisos.")
