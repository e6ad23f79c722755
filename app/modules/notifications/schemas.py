from pydantic import BaseModel, ConfigDict
from datetime import datetime

from app.shared.enums import NotificationType

class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: NotificationType
    message: str
    is_read: bool
    created_at: datetime

class MessageResponse(BaseModel):
    message: str
