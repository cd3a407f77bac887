from fastapi import APIRouter
from tailorbook.api.v1.endpoints import (
    auth, health, clients, measurements, appointments, timers
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Resource endpoints
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(measurements.router, prefix="/measurements", tags=["measurements"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(timers.router, prefix="/timers", tags=["timers"])
