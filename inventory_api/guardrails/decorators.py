from fastapi import HTTPException, Depends
from inventory_api.api.auth import get_current_active_user
from inventory_api.guardrails.permissions import permission_checker, Permission
from inventory_api.models.user import User

def require_permission(permission: Permission):
    """
    Dependency to check static permission.
    """
    def check(user: User = Depends(get_current_active_user)):
        if not permission_checker.check_permission(user, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Permission denied: {permission.value} required"
            )
        return user
    return check
