from datetime import datetime
from typing import Any
from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped
from infrastructure.db.models.base import Base


class SystemSettingModel(Base):
    """Key/value system settings (notifications_enabled, notifications_permission...)."""

    __tablename__ = "system_setting"

    key: Mapped[str] = Column(String, primary_key=True)
    value: Mapped[Any] = Column(JSONB, nullable=False)
    updated_at: Mapped[datetime] = Column(DateTime, nullable=False, default=datetime.now)
