# Employee console routers (bearer session auth)
from .routes.employee import employee_routers

# Public routers (health, chat webhook)
from .routes.public import public_routers

__all__ = ["employee_routers", "public_routers"]
