"""Use cases for managing users."""

from .admin import change_user_role, list_users, set_organizer_status
from .authenticate_user import authenticate_user
from .profile import EDITABLE_PROFILE_FIELDS, get_user, update_profile
from .register_user import SELF_SERVICE_ROLES, register_user, split_full_name

__all__ = [
    "authenticate_user",
    "change_user_role",
    "EDITABLE_PROFILE_FIELDS",
    "get_user",
    "list_users",
    "register_user",
    "SELF_SERVICE_ROLES",
    "set_organizer_status",
    "split_full_name",
    "update_profile",
]
