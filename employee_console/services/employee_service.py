import re
from typing import Optional

from sqlalchemy.orm import Session

from employee_console.core.logging import get_logger
from employee_console.db.repositories.employee_repository import EmployeeRepository
from employee_console.schemas.employee import AuthUserInDB, EmployeeInDB

logger = get_logger(__name__)

SALES_ROLES = {"SALES", "ADMIN", "SUPERADMIN"}


def normalize_role(role: Optional[str]) -> str:
    """'super admin' -> 'SUPER_ADMIN'"""
    return re.sub(r"[\s-]+", "_", str(role or "").strip()).upper()


def has_sales_access(auth_role: Optional[str], employee_role: Optional[str] = None) -> bool:
    return normalize_role(auth_role) in SALES_ROLES or normalize_role(employee_role) in SALES_ROLES


class EmployeeService:
    def __init__(self, db_session: Session):
        self.employee_repo = EmployeeRepository(db_session)

    def resolve_employee_profile(self, user: AuthUserInDB) -> Optional[EmployeeInDB]:
        """
        Find the employee profile for an auth identity.

        Looks up by user id first, then by e-mail. A profile found by e-mail
        that points at another identity is relinked to this one.
        """
        employee = self.employee_repo.get_by_user_id(user.id)
        if not employee:
            employee = self.employee_repo.get_by_email(user.email)
            if employee and employee.user_id != user.id:
                logger.info(f"Relinking employee {employee.id} to user {user.id}")
                employee = self.employee_repo.link_user(employee, user.id)

        if not employee:
            return None
        return EmployeeInDB.model_validate(employee)

    def create_employee(
        self,
        email: str,
        full_name: Optional[str] = None,
        role: str = "DATA_ENTRY",
        user_id=None,
    ) -> EmployeeInDB:
        employee = self.employee_repo.create({
            "email": email.strip().lower(),
            "full_name": full_name,
            "role": normalize_role(role) or "DATA_ENTRY",
            "user_id": user_id,
        })
        logger.info(f"Created employee {employee.id} ({employee.role})")
        return EmployeeInDB.model_validate(employee)
