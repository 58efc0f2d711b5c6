import logging
from datetime import datetime

import anyio
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .db import check_database_connection, get_engine, get_sessionmaker, init_db, mask_database_url
from .routers import (
    assessments_router,
    auth_router,
    collaborators_router,
    dashboard_router,
    modules_router,
    reports_router,
    skills_router,
    users_router,
)
from .services.seed_service import seed_default_data
from .version import read_version

SETTINGS = get_settings()
APP_VERSION = read_version()

logger = logging.getLogger("uvicorn")

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Anexa um handler de arquivo ao logger da aplicação quando LOG_FILE estiver definido."""
    if not settings.log_file:
        return
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return
    handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > logging.INFO:
        logger.setLevel(logging.INFO)


# Inicializar a aplicação FastAPI
app = FastAPI(
    title="HCM Skills API",
    description="API da matriz de competências: colaboradores, módulos, avaliações e relatórios",
    version=APP_VERSION,
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Incluir routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(collaborators_router)
app.include_router(modules_router)
app.include_router(skills_router)
app.include_router(assessments_router)
app.include_router(dashboard_router)
app.include_router(reports_router)


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Erro interno do servidor."})


@app.on_event("startup")
async def _startup() -> None:
    configure_logging(SETTINGS)
    logger.info("🚀 HCM Skills API starting - version=%s environment=%s", APP_VERSION, SETTINGS.environment)
    logger.info("📊 Database URL: %s", mask_database_url(SETTINGS.database_url))

    engine = get_engine()
    created = init_db(engine)
    if created:
        logger.info("🗄️ Database initialized")

    if SETTINGS.seed_on_startup:
        db = get_sessionmaker()()
        try:
            seed_default_data(db, SETTINGS)
        finally:
            db.close()
        logger.info("🌱 Default data ensured (admin: %s)", SETTINGS.seed_admin_email)

    logger.info("✅ Startup completed successfully!")


@app.get("/health")
async def health() -> dict:
    """Basic health check endpoint with status summary."""
    db_ok = await anyio.to_thread.run_sync(lambda: check_database_connection(get_engine()))
    return {
        "status": "ok" if db_ok else "degraded",
        "version": APP_VERSION,
        "db_ok": db_ok,
        "time": datetime.now().isoformat(),
    }


def run() -> None:
    """Sobe o servidor na porta configurada em APP_PORT."""
    uvicorn.run(app, host="0.0.0.0", port=SETTINGS.app_port)


if __name__ == "__main__":
    run()
