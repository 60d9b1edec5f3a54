from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel


class NotificationSettingsResponse(BaseModel):
    enabled: bool
    permission: str


class NotificationSettingsUpdate(BaseModel):
    enabled: Optional[bool] = None
    permission: Optional[str] = None


class ToastResponse(BaseModel):
    title: str
    body: str
    urgent: bool
    tag: str
    url: str
    created_at: datetime


class ToastListResponse(BaseModel):
    toasts: List[ToastResponse]
