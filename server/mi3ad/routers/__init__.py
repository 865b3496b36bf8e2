"""FastAPI routers package."""

from .auth import router as auth_router
from .booking import router as booking_router
from .chat import router as chat_router
from .event import router as event_router
from .favorites import router as favorites_router
from .health import router as health_router
from .metrics import router as metrics_router
from .notification import router as notification_router
from .profile import router as profile_router
from .school import router as school_router
from .security import router as security_router
from .ticket import router as ticket_router

API_ROUTERS = [
    health_router,
    auth_router,
    profile_router,
    event_router,
    booking_router,
    ticket_router,
    school_router,
    chat_router,
    notification_router,
    favorites_router,
    security_router,
]

__all__ = [
    "API_ROUTERS",
    "auth_router",
    "booking_router",
    "chat_router",
    "event_router",
    "favorites_router",
    "health_router",
    "metrics_router",
    "notification_router",
    "profile_router",
    "school_router",
    "security_router",
    "ticket_router",
]
