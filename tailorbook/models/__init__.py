from .user import User, UserRole
from .client import Client
from .measurement import Measurement
from .appointment import Appointment, AppointmentStatus
from .timer import Timer

__all__ = [
    "User", "UserRole",
    "Client",
    "Measurement",
    "Appointment", "AppointmentStatus",
    "Timer",
]
