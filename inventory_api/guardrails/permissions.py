from enum import Enum
import logging
from inventory_api.models.user import Role, User

logger = logging.getLogger(__name__)

class Permission(str, Enum):
    # Catalog
    VIEW_INVENTORY = "VIEW_INVENTORY"
    MANAGE_CATALOG = "MANAGE_CATALOG"

    # Purchasing
    VIEW_PURCHASE_ORDERS = "VIEW_PURCHASE_ORDERS"
    MANAGE_PURCHASE_ORDERS = "MANAGE_PURCHASE_ORDERS"

    # Sales
    RECORD_SALE = "RECORD_SALE"
    VIEW_SALES = "VIEW_SALES"

    # Admin
    CONFIGURE_SYSTEM = "CONFIGURE_SYSTEM"
    MANAGE_USERS = "MANAGE_USERS"

# Role -> Permissions Mapping
ROLE_PERMISSIONS = {
    Role.ADMIN: [p for p in Permission], # All
    Role.STAFF: [
        Permission.VIEW_INVENTORY, Permission.VIEW_PURCHASE_ORDERS,
        Permission.RECORD_SALE, Permission.VIEW_SALES
    ],
}

class PermissionChecker:

    def check_permission(self, user: User, permission: Permission) -> bool:
        """
        Basic Role-Based Check.
        """
        try:
            role_enum = Role(user.role)
        except ValueError:
            logger.warning(f"Unknown role {user.role} for user {user.email}")
            return False

        allowed = ROLE_PERMISSIONS.get(role_enum, [])
        if permission in allowed:
            return True

        logger.warning(f"User {user.email} ({role_enum.value}) denied permission {permission.value}")
        return False

permission_checker = PermissionChecker()
