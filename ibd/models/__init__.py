# Models package
from .user import User, UserRole, AuthType
from .balance_item import BalanceItem, BalanceCategory, BalanceType

__all__ = [
    "User", "UserRole", "AuthType",
    "BalanceItem", "BalanceCategory", "BalanceType",
]
