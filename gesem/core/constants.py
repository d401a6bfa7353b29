"""
Constantes centralizadas para el sistema.
Elimina "magic strings" y provee tipado fuerte para valores comunes.
"""

from enum import Enum, unique


@unique
class BillingStatus(str, Enum):
    """Estado de renovación de un cliente, derivado de su próxima fecha de pago."""

    ACTIVE = "active"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"


@unique
class IncomePeriod(str, Enum):
    """Ventanas de agregación de ingresos del dashboard."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


@unique
class NotificationChannel(str, Enum):
    """Canales de aviso (solo se genera el enlace, no se envía nada)."""

    WHATSAPP = "whatsapp"
    SMS = "sms"


@unique
class NotificationLogStatus(str, Enum):
    SENT = "sent"


# Días de anticipación para considerar a un cliente "próximo a vencer"
NEAR_EXPIRY_DAYS = 4

# Límites de paginación de listados
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 50

# Cantidad de clientes recientes en el dashboard
RECENT_CLIENTS_LIMIT = 5
