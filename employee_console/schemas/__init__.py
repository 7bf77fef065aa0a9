# employee_console/schemas/__init__.py
from employee_console.schemas.category import (
    CategoryLevel,
    CategoryImageFile,
    CategoryForm,
    HeadCategoryInDB,
    SubCategoryInDB,
    MicroCategoryInDB,
)
from employee_console.schemas.upload import (
    CategoryImageUploadRequest,
    CategoryImageUploadResponse,
)
from employee_console.schemas.vendor import (
    VendorOnboardingForm,
    VendorInDB,
    StateInDB,
    CityInDB,
)
from employee_console.schemas.sales import (
    SalesStats,
    LeadInDB,
    LeadStatusUpdate,
)
from employee_console.schemas.employee import (
    AuthUserInDB,
    EmployeeInDB,
    EmployeeContext,
)
from employee_console.schemas.chat import (
    ChatMessage,
    ChatRequest,
    ChatReply,
)
