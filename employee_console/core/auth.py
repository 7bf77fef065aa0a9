"""Bearer session authentication for employee endpoints."""
from typing import Optional

from fastapi import Request, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from employee_console.core.exceptions import AuthenticationError, NotFoundError, PermissionDeniedError
from employee_console.core.logging import get_logger
from employee_console.db.base import get_db_session
from employee_console.schemas.employee import EmployeeContext
from employee_console.services.auth_service import AuthService
from employee_console.services.employee_service import EmployeeService, has_sales_access

logger = get_logger(__name__)


class EmployeeSessionAuth(HTTPBearer):
    """Resolve the bearer session to an auth identity and its employee profile."""

    def __init__(self, require_sales: bool = False):
        """
        Args:
            require_sales: Only let SALES, ADMIN and SUPERADMIN through
        """
        # Missing headers are reported through AuthenticationError, not FastAPI's default
        super().__init__(auto_error=False)
        self.require_sales = require_sales

    async def __call__(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(HTTPBearer(auto_error=False)),
        db: Session = Depends(get_db_session),
    ) -> EmployeeContext:
        if credentials is None or not credentials.credentials:
            raise AuthenticationError("Not authenticated")

        user = AuthService(db).resolve_session(credentials.credentials)
        if not user:
            client_host = request.client.host if request.client else "unknown"
            logger.warning(f"Invalid session token from {client_host}")
            raise AuthenticationError("Invalid or expired session")

        employee = EmployeeService(db).resolve_employee_profile(user)
        if not employee:
            raise NotFoundError("Employee profile not found")

        if self.require_sales and not has_sales_access(user.role, employee.role):
            logger.warning(f"User {user.id} ({employee.role}) denied sales access to {request.url.path}")
            raise PermissionDeniedError("Sales access required")

        request.state.user_id = user.id
        return EmployeeContext(user=user, employee=employee)


# Pre-configured auth dependencies
employee_auth = EmployeeSessionAuth()
sales_auth = EmployeeSessionAuth(require_sales=True)
