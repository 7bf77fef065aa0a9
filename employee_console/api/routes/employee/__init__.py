from .profile import profile_router
from .uploads import uploads_router
from .sales import sales_router
from .categories import categories_router
from .vendors import vendors_router

employee_routers = [
    ("profile", profile_router),
    ("uploads", uploads_router),
    ("sales", sales_router),
    ("categories", categories_router),
    ("vendors", vendors_router),
]

__all__ = ["employee_routers"]
