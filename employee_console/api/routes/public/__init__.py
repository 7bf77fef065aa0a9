from .health import health_router
from .chat import chat_router

public_routers = [
    ("health", health_router),
    ("chat", chat_router),
]

__all__ = ["public_routers"]
