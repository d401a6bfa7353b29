# gesem/core/audit.py
"""
Bitácora de auditoría: una línea JSON por acción sensible (borrado de
clientes, registro de pagos, avisos generados). Va a su propio archivo y no
se mezcla con el log de la aplicación.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Request

from ..models.user import User
from .config import get_settings

AUDIT_LOGGER_NAME = "gesem.audit"
AUDIT_LOG_FILENAME = "audit.log"


def get_audit_logger() -> logging.Logger:
    """Logger de auditoría; el FileHandler se crea en el primer uso."""
    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    if audit_logger.handlers:
        return audit_logger

    log_dir = get_settings().audit_log_dir
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(os.path.join(log_dir, AUDIT_LOG_FILENAME), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))

    audit_logger.addHandler(handler)
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False
    return audit_logger


def request_ip(request: Optional[Request]) -> str:
    if request is None:
        return "unknown"
    # Detrás de Caddy/nginx la IP real llega en X-Forwarded-For
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_action(
    action: str,
    resource_type: str,
    resource_id: Any,
    user: Optional[User] = None,
    request: Optional[Request] = None,
    details: Optional[dict] = None,
    status: str = "success",
) -> None:
    """
    Registra una acción en la bitácora.

    Args:
        action: DELETE, CREATE, NOTIFY...
        resource_type: client, payment...
        resource_id: id del recurso afectado
        user: propietario que ejecuta la acción
        request: petición, para la IP de origen
        details: contexto adicional (montos, canal, etc.)
        status: "success" o "failure"
    """
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action.upper(),
        "resource_type": resource_type,
        "resource_id": str(resource_id),
        "owner_id": str(user.id) if user else None,
        "username": user.username if user else "anonymous",
        "ip_address": request_ip(request),
        "status": status,
    }
    if details:
        entry["details"] = details

    get_audit_logger().info(json.dumps(entry, ensure_ascii=False, default=str))
