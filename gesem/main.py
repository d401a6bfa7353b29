# gesem/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# El .env debe estar cargado antes de leer la configuración
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import health
from .api.clients import main as clients_api
from .api.dashboard import main as dashboard_api
from .api.notes import main as notes_api
from .api.notifications import main as notifications_api
from .api.payments import main as payments_api
from .core.config import get_settings
from .core.users import auth_backend_cookie, auth_backend_jwt, fastapi_users
from .db.engine_sync import create_sync_db_and_tables
from .schemas.user import UserCreate, UserRead, UserUpdate

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_sync_db_and_tables()
    logger.info(f"{settings.app_name} iniciado ({settings.app_env}), tablas verificadas.")
    yield
    logger.info(f"{settings.app_name} detenido.")


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)


# --- Límite de peticiones por IP ---
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Límite de peticiones superado desde {get_remote_address(request)}")
    return JSONResponse(status_code=429, content={"detail": f"Demasiadas solicitudes: {exc.detail}"})


# --- Orígenes y hosts permitidos ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.hosts)

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Mismo cuerpo {"detail": ...} para todos los errores HTTP de la API
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# --- Autenticación (fastapi-users) ---
app.include_router(fastapi_users.get_auth_router(auth_backend_jwt), prefix="/auth/jwt", tags=["Auth"])
app.include_router(
    fastapi_users.get_auth_router(auth_backend_cookie), prefix="/auth/cookie", tags=["Auth"]
)
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate), prefix="/auth", tags=["Auth"]
)
app.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate), prefix="/users", tags=["Users"]
)

# --- API de dominio ---
DOMAIN_ROUTERS = (
    (health.router, "System"),
    (dashboard_api.router, "Dashboard"),
    (clients_api.router, "Clients"),
    (payments_api.router, "Payments"),
    (notes_api.router, "Notes"),
    (notifications_api.router, "Notifications"),
)
for router, tag in DOMAIN_ROUTERS:
    app.include_router(router, prefix="/api", tags=[tag])
