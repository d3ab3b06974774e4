from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from database.session import Base
from domain.user.user_token import utcnow

class YogaPlan(Base):
    __tablename__ = "yoga_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_name = Column(String(100), nullable=False)
    yoga_type = Column(String(50), nullable=False)
    meditation_time = Column(Integer, nullable=False)  # 분 단위
    duration_weeks = Column(Integer, nullable=False)
    daily_schedule = Column(JSON, nullable=False, default=list)
    notes = Column(Text)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="plans")
