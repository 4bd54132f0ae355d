"""Database models"""
from careers.models.company import Company
from careers.models.user import User, UserRole
from careers.models.office import Office
from careers.models.job_function import JobFunction, JobRole
from careers.models.department import Department
from careers.models.job_board import JobBoard
from careers.models.headcount_request import HeadcountRequest, HeadcountStatus
from careers.models.job import Job, JobStatus
from careers.models.company_api_key import CompanyApiKey
from careers.models.job_application import JobApplication, Interview, ApplicationStatus
from careers.models.interview_process import InterviewProcess
from careers.models.job_template import JobTemplate
from careers.models.user_log import UserLog
from careers.models.notification import Notification, NotificationType

__all__ = [
    "Company",
    "User",
    "UserRole",
    "Office",
    "JobFunction",
    "JobRole",
    "Department",
    "JobBoard",
    "HeadcountRequest",
    "HeadcountStatus",
    "Job",
    "JobStatus",
    "CompanyApiKey",
    "JobApplication",
    "Interview",
    "ApplicationStatus",
    "InterviewProcess",
    "JobTemplate",
    "UserLog",
    "Notification",
    "NotificationType",
]
