from .client import Client
from .note import Note
from .notification_log import NotificationLog
from .payment import Payment
from .user import User
