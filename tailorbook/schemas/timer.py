from datetime import datetime
from typing import Optional

from tailorbook.schemas.base import CamelModel


class TimerStart(CamelModel):
    client_id: str
    description: Optional[str] = None


class TimerStop(CamelModel):
    timer_id: str
    end_time: Optional[datetime] = None


class TimerRead(CamelModel):
    id: str
    client_id: str
    tailor_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    description: Optional[str] = None
