"""Domain services: one method per API endpoint."""
from careers_admin.services.activity import NotificationService, UserLogService
from careers_admin.services.analytics import AnalyticsFilters, AnalyticsService, DashboardService
from careers_admin.services.api_keys import CompanyApiKeyService
from careers_admin.services.auth import AuthService, UserService
from careers_admin.services.company import CompanyService, DepartmentService, OfficeService
from careers_admin.services.headcount import HeadcountService
from careers_admin.services.interview_processes import InterviewProcessService
from careers_admin.services.job_boards import JobBoardService
from careers_admin.services.job_functions import JobFunctionService, JobRoleService
from careers_admin.services.job_templates import JobTemplateService
from careers_admin.services.jobs import JobService

__all__ = [
    "AnalyticsFilters",
    "AnalyticsService",
    "AuthService",
    "CompanyApiKeyService",
    "CompanyService",
    "DashboardService",
    "DepartmentService",
    "HeadcountService",
    "InterviewProcessService",
    "JobBoardService",
    "JobFunctionService",
    "JobRoleService",
    "JobService",
    "JobTemplateService",
    "NotificationService",
    "OfficeService",
    "UserLogService",
    "UserService",
]
