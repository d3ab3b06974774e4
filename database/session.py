from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings


def _engine_options(url: str) -> dict:
    """DB 종류별 연결 옵션"""
    if url.startswith("sqlite"):
        # 테스트용 인메모리 DB는 모든 세션이 하나의 연결을 공유해야 함
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    # MySQL(PyMySQL) 기준, UTF-8 및 타임아웃 설정
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "connect_args": {
            "charset": "utf8mb4",
            "use_unicode": True,
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "read_timeout": settings.DB_READ_TIMEOUT,
        },
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
