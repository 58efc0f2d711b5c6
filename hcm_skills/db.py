"""Database connection and session management for SQLAlchemy."""

import functools
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger("uvicorn")

# Base class for all models
Base = declarative_base()

# Chave em Session.info que marca uma unidade de trabalho aberta por transaction()
_IN_TRANSACTION = "hcm_in_transaction"
# Opção de execução lida no evento "begin" para pedir o lock de escrita do SQLite
_BEGIN_IMMEDIATE = "hcm_begin_immediate"


def mask_database_url(database_url: str) -> str:
    """Retorna a URL do banco com a senha mascarada, para logs."""
    try:
        return make_url(database_url).render_as_string(hide_password=True)
    except Exception:
        return "(URL format not recognized)"


def sqlite_database_path(database_url: Union[str, URL]) -> Optional[Path]:
    """Caminho do arquivo SQLite, ou None para outros bancos e para ':memory:'."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def _install_sqlite_pragmas(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # O pysqlite abre transações por conta própria; desligamos para controlar o BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(_BEGIN_IMMEDIATE):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cria o engine SQLAlchemy para a URL informada.

    Para SQLite, garante o diretório do arquivo, liga as chaves estrangeiras e
    usa um único connection compartilhado quando o banco é em memória.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        db_path = sqlite_database_path(database_url)
        if db_path is not None:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
            )
        else:
            engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        _install_sqlite_pragmas(engine)
        return engine

    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_pre_ping=True,  # Check connection validity before using
        echo=echo,
    )


@functools.lru_cache()
def get_engine() -> Engine:
    """
    Engine do processo (criado uma única vez, sob demanda).

    Evita efeitos colaterais na importação do módulo.
    """
    settings = get_settings()
    logger.info("Connecting to database: %s", mask_database_url(settings.database_url))
    return create_db_engine(settings.database_url)


@functools.lru_cache()
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(autoflush=False, bind=get_engine())


def init_db(engine: Engine) -> bool:
    """
    Cria as tabelas que ainda não existem.

    Returns:
        True se o arquivo SQLite foi criado nesta chamada
    """
    # Importa os modelos para registrá-los no metadata
    from . import models  # noqa: F401

    db_path = sqlite_database_path(engine.url)
    existed_before = db_path.exists() if db_path is not None else True
    Base.metadata.create_all(bind=engine)
    created = not existed_before
    if created:
        logger.info("Database file created at %s", db_path)
    return created


def check_database_connection(engine: Engine) -> bool:
    """Executa uma consulta simples para verificar a conexão."""
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1")).fetchone()
            return row is not None and row[0] == 1
    except Exception as e:
        logger.error("Database connection error: %s", e)
        return False


def in_transaction(db: Session) -> bool:
    """Indica se a sessão está dentro de um bloco transaction()."""
    return bool(db.info.get(_IN_TRANSACTION))


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Executa uma unidade de trabalho atômica.

    Faz commit ao final; em qualquer exceção faz rollback de todas as
    instruções do bloco e relança o erro original. Não pode ser aninhado.

    Usage:
        with transaction(db):
            repo_a.create(...)
            repo_b.delete(...)
    """
    if in_transaction(db):
        raise RuntimeError("Transações aninhadas não são suportadas.")

    # Encerra uma leitura pendente para que o bloco comece já com o lock de escrita
    if db.in_transaction():
        db.commit()

    db.info[_IN_TRANSACTION] = True
    try:
        db.connection(execution_options={_BEGIN_IMMEDIATE: True})
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.info.pop(_IN_TRANSACTION, None)


def get_db() -> Iterator[Session]:
    """
    Dependency for FastAPI routes that need database access.

    Usage:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            return ItemsRepository(db).list()
    """
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()
