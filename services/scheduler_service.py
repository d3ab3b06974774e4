import logging
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Settings, settings
from database.session import SessionLocal
from domain.user import user_crud

logger = logging.getLogger(__name__)

class SchedulerService:
    """주기 작업 스케줄러 (만료 토큰 정리)"""

    def __init__(self, config: Settings, session_factory: Callable[[], Session] = SessionLocal):
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory
        self.sweep_interval_minutes = config.TOKEN_SWEEP_INTERVAL_MINUTES

    def start(self):
        """스케줄러 시작"""
        self.scheduler.add_job(
            func=self.purge_expired_tokens,
            trigger=IntervalTrigger(minutes=self.sweep_interval_minutes),
            id="purge_expired_tokens",
            name="만료 토큰 정리",
            replace_existing=True
        )
        self.scheduler.start()
        logger.info("Scheduler started")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    def purge_expired_tokens(self) -> int:
        """만료된 OTP / 검증 링크 / 재설정 토큰 정리"""
        db = self.session_factory()
        try:
            cleared = user_crud.purge_expired_tokens(db)
            if cleared:
                logger.info(f"Expired tokens cleared: {cleared}")
            return cleared
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Expired token sweep failed: {e}")
            return 0
        finally:
            db.close()

# 전역 스케줄러 인스턴스
scheduler_service = SchedulerService(settings)
