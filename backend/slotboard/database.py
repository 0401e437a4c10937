from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def _make_engine(url: str):
    if url.startswith("sqlite"):
        # in-memory: una sola connessione condivisa, altrimenti ogni sessione vede un db vuoto
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url,
                future=True,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
        )

    # In sviluppo: nessun pool -> connessione chiusa subito dopo ogni request
    if settings.APP_ENV.lower() != "prod":
        return create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            poolclass=NullPool,
        )

    # In produzione: pool minimo e prudente
    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
        pool_recycle=1800,
    )

engine = _make_engine(settings.DB_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()  # rilascia la connessione
