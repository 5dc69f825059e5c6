from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from hydro.config import settings

# SQLite needs cross-thread access for the threaded test client and workers
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency that yields a database session
    Used with FastAPI Depends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
