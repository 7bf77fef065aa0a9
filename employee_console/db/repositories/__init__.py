from employee_console.db.repositories.category_repository import CategoryRepository
from employee_console.db.repositories.lead_repository import LeadRepository
from employee_console.db.repositories.vendor_repository import VendorRepository
from employee_console.db.repositories.employee_repository import EmployeeRepository

__all__ = [
    "CategoryRepository",
    "LeadRepository",
    "VendorRepository",
    "EmployeeRepository",
]
