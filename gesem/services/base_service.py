# gesem/services/base_service.py
"""
OwnedCRUDService: servicio genérico de CRUD filtrado por propietario.
Todo registro pertenece a un usuario (user_id); un registro de otro usuario
se trata igual que uno inexistente.
"""
import logging
import uuid
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar

from sqlmodel import Session

from ..core.constants import DEFAULT_PER_PAGE, MAX_PER_PAGE

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")


def clamp_per_page(per_page: int | None) -> int:
    """per_page acotado a 1..50 (15 por defecto)."""
    if not per_page:
        return DEFAULT_PER_PAGE
    return max(1, min(MAX_PER_PAGE, per_page))


def page_meta(total: int, page: int, per_page: int) -> Dict[str, int]:
    last_page = max(1, (total + per_page - 1) // per_page)
    return {
        "current_page": page,
        "last_page": last_page,
        "per_page": per_page,
        "total": total,
    }


def paginate_list(items: Sequence[Any], page: int, per_page: int) -> List[Any]:
    page = max(1, page)
    offset = (page - 1) * per_page
    return list(items[offset : offset + per_page])


class OwnedCRUDService(Generic[ModelType]):
    """
    Base class providing owner-scoped CRUD operations.

    Usage:
        class NoteService(OwnedCRUDService[Note]):
            def __init__(self, session: Session):
                super().__init__(session, Note)
    """

    # Campos que nunca se aceptan desde los datos de entrada
    protected_fields = ("id", "user_id")

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model

    def get_by_id(self, owner_id: uuid.UUID, id: int) -> ModelType:
        """
        Raises:
            FileNotFoundError: si no existe o pertenece a otro usuario.
        """
        record = self.session.get(self.model, id)
        if not record or record.user_id != owner_id:
            raise FileNotFoundError(f"{self.model.__name__} {id} no encontrado.")
        return record

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k not in self.protected_fields}

    def create(self, owner_id: uuid.UUID, data: Dict[str, Any]) -> ModelType:
        try:
            new_record = self.model(**self._clean(data), user_id=owner_id)
            self.session.add(new_record)
            self.session.commit()
            self.session.refresh(new_record)
            return new_record
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error creando {self.model.__name__}: {e}")
            raise ValueError(f"Error creando {self.model.__name__}: {e}")

    def update(self, owner_id: uuid.UUID, id: int, data: Dict[str, Any]) -> ModelType:
        record = self.get_by_id(owner_id, id)

        for key, value in self._clean(data).items():
            if hasattr(record, key):
                setattr(record, key, value)

        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
            return record
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error actualizando {self.model.__name__} {id}: {e}")
            raise ValueError(f"Error actualizando {self.model.__name__}: {e}")

    def delete(self, owner_id: uuid.UUID, id: int) -> None:
        record = self.get_by_id(owner_id, id)
        self.session.delete(record)
        self.session.commit()
