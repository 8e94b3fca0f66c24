# sinkquote/utils/check_roles.py
"""
Role checks. Every user holds exactly one of the three roles below; admins
and managers see all company data, salespeople only what they created.
"""
import enum
from functools import wraps
from typing import Callable, Iterable, Optional

from fastapi import HTTPException


class Role(str, enum.Enum):
    admin = "admin"
    manager = "manager"
    salesperson = "salesperson"


ALL_ROLES = (Role.admin, Role.manager, Role.salesperson)
MANAGEMENT_ROLES = (Role.admin, Role.manager)
ADMIN_ONLY = (Role.admin,)


def role_of(user) -> Optional[Role]:
    """The user's role, or None when it is missing or not one of ours."""
    value = (getattr(user, "role", None) or "").lower()
    try:
        return Role(value)
    except ValueError:
        return None


def has_role(user, roles: Iterable[Role]) -> bool:
    return role_of(user) in tuple(roles)


def is_admin(user) -> bool:
    return role_of(user) is Role.admin


def is_salesperson(user) -> bool:
    return role_of(user) is Role.salesperson


def require_role(roles: Iterable[Role]):
    """Decorator to validate user role; expects user to be passed by route."""
    allowed = tuple(Role(r) for r in roles)

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, _user, **kwargs):
            if _user is None:
                raise HTTPException(status_code=401, detail="User not authenticated")
            if not has_role(_user, allowed):
                raise HTTPException(status_code=403, detail="Permission denied")
            return await func(*args, _user=_user, **kwargs)
        return wrapper
    return decorator
