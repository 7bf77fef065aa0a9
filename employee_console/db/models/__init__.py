# employee_console/db/models/__init__.py
from employee_console.db.models.category import HeadCategory, SubCategory, MicroCategory
from employee_console.db.models.employee import AuthUser, AuthSession, Employee
from employee_console.db.models.vendor import State, City, Vendor
from employee_console.db.models.sales import Lead, LeadPurchase, VendorPlan

__all__ = [
    "HeadCategory",
    "SubCategory",
    "MicroCategory",
    "AuthUser",
    "AuthSession",
    "Employee",
    "State",
    "City",
    "Vendor",
    "Lead",
    "LeadPurchase",
    "VendorPlan",
]
