# employee_console/db/repositories/employee_repository.py
from typing import Any, Dict, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from employee_console.db.models.employee import Employee


class EmployeeRepository:
    """Repository for employee profiles"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_user_id(self, user_id: UUID) -> Optional[Employee]:
        return self.db_session.query(Employee).filter(Employee.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[Employee]:
        """Get employee by email (case-insensitive, space-stripped comparison)"""
        if not email:
            return None
        normalized_email = email.strip().lower()
        return self.db_session.query(Employee).filter(
            func.lower(func.trim(Employee.email)) == normalized_email
        ).first()

    def create(self, values: Dict[str, Any]) -> Employee:
        db_employee = Employee(**values)

        self.db_session.add(db_employee)
        self.db_session.commit()
        self.db_session.refresh(db_employee)

        return db_employee

    def link_user(self, employee: Employee, user_id: UUID) -> Employee:
        """Point an employee profile at an auth identity"""
        employee.user_id = user_id
        self.db_session.commit()
        self.db_session.refresh(employee)
        return employee
