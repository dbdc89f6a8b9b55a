from gym_admin.models.role import Role
from gym_admin.models.user import User
from gym_admin.models.profile import Profile
from gym_admin.models.payment_plan import PaymentPlan
from gym_admin.models.payment import Payment
from gym_admin.models.access_log import AccessLog
from gym_admin.models.instructor_client import InstructorClient
from gym_admin.models.trash import DeletedItemTrash
from gym_admin.models.audit_log import AuditLog

__all__ = [
    "Role",
    "User",
    "Profile",
    "PaymentPlan",
    "Payment",
    "AccessLog",
    "InstructorClient",
    "DeletedItemTrash",
    "AuditLog",
]
