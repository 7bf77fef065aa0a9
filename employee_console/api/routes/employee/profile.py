from fastapi import APIRouter, Depends

from employee_console.core.auth import employee_auth
from employee_console.schemas.employee import EmployeeContext
from employee_console.services.employee_service import normalize_role, has_sales_access

profile_router = APIRouter()


@profile_router.get("/me")
async def get_me(context: EmployeeContext = Depends(employee_auth)):
    """Employee profile of the signed-in user"""
    employee = context.employee.model_copy(update={
        "user_id": context.user.id,
        "role": normalize_role(context.employee.role) or "UNKNOWN",
    })
    return {
        "success": True,
        "employee": employee,
        "can_access_sales": has_sales_access(context.user.role, context.employee.role),
    }
