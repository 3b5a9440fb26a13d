"""
Application layer use cases.
Business logic for the Skill Link marketplace.
"""

from .base_use_case import *
from .auth_use_cases import *
from .job_use_cases import *
from .invite_use_cases import *
from .project_use_cases import *
from .payment_use_cases import *
from .notification_use_cases import *
from .review_use_cases import *
from .worker_use_cases import *
from .employer_use_cases import *
from .admin_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "PaginatedQueryUseCase",
    "CommandUseCase",

    # Auth Use Cases
    "RegisterUserUseCase",
    "LoginUseCase",
    "AdminLoginUseCase",
    "GetCurrentUserUseCase",
    "UpdateProfileUseCase",
    "UpdateEmployerStepUseCase",
    "SendOtpUseCase",
    "VerifyOtpUseCase",

    # Job Use Cases
    "CreateJobUseCase",
    "ListMyJobsUseCase",
    "GetJobUseCase",
    "UpdateJobUseCase",
    "DeleteJobUseCase",

    # Invite Use Cases
    "CreateInviteUseCase",
    "ApplyToJobUseCase",
    "AcceptInviteUseCase",
    "DeclineInviteUseCase",
    "ApproveInviteOrApplicationUseCase",
    "DeclineApplicationUseCase",
    "ListInvitesUseCase",
    "GetInviteUseCase",

    # Project Use Cases
    "ListProjectsUseCase",
    "GetProjectUseCase",
    "CreateProjectUseCase",
    "UpdateProjectUseCase",
    "UpdateMilestoneUseCase",
    "ListMessagesUseCase",
    "AddMessageUseCase",
    "ListSubmissionsUseCase",
    "AddSubmissionUseCase",
    "DeleteSubmissionUseCase",
    "ListEventsUseCase",
    "RequestPaymentUseCase",
    "ExtendDeadlineUseCase",
    "RequestDeadlineExtensionUseCase",
    "ApproveDeadlineExtensionUseCase",
    "ContactSupportUseCase",

    # Payment Use Cases
    "EmployerPaymentsOverviewUseCase",
    "WorkerPaymentsOverviewUseCase",
    "EmployerPaymentsHistoryUseCase",
    "WorkerPaymentsHistoryUseCase",
    "PayWorkerUseCase",
    "DepositUseCase",
    "RequestWithdrawalUseCase",

    # Notification Use Cases
    "ListNotificationsUseCase",
    "CreateNotificationUseCase",
    "MarkNotificationReadUseCase",
    "MarkAllNotificationsReadUseCase",

    # Review Use Cases
    "CreateReviewUseCase",
    "ListReviewsForUserUseCase",
    "ListMyReviewsUseCase",

    # Worker Use Cases
    "SearchWorkersUseCase",
    "WorkerFilterMetaUseCase",
    "GetWorkerProfileUseCase",
    "ListWorkerInvitationsUseCase",
    "ListWorkerActiveJobsUseCase",
    "ListWorkerCompletedJobsUseCase",
    "WorkerDashboardUseCase",

    # Employer Use Cases
    "EmployerDashboardUseCase",

    # Admin Use Cases
    "AdminListUsersUseCase",
    "AdminGetUserUseCase",
    "AdminListJobsUseCase",
    "AdminGetJobUseCase",
    "AdminListPaymentsUseCase",
    "AdminGetPaymentUseCase",
]
