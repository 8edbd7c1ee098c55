import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import text

from eventapi.config import settings
from eventapi.database.connection import engine
from eventapi.models.base import Base

# 테이블 등록을 위한 모델 import
from eventapi.models import attendance, event, referral, reward  # noqa: F401


def init_db():
    """데이터베이스 초기화"""
    try:
        # 스키마 생성 (PostgreSQL)
        if not settings.is_sqlite:
            with engine.connect() as conn:
                conn.execute(
                    text(f"CREATE SCHEMA IF NOT EXISTS {settings.POSTGRES_SCHEMA}")
                )
                conn.commit()

        # 테이블 생성
        Base.metadata.create_all(bind=engine)
        print(
            f"Database initialized successfully with schema: {settings.POSTGRES_SCHEMA}"
        )

    except Exception as e:
        print(f"Database initialization failed: {str(e)}")
        raise


if __name__ == "__main__":
    init_db()
