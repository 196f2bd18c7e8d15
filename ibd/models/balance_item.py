import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum as SQLEnum
from ..database import Base


class BalanceCategory(str, enum.Enum):
    ASSET = "asset"
    LIABILITY = "liability"
    MEMO_ASSET = "memo_asset"
    MEMO_LIABILITY = "memo_liability"


class BalanceType(str, enum.Enum):
    """Whether an item is reported on or off the balance sheet"""
    ON_BALANCE_SHEET = "on_balance_sheet"
    OFF_BALANCE_SHEET = "off_balance_sheet"


class BalanceItem(Base):
    """Line item of the daily balance report"""
    __tablename__ = "balance_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    category = Column(
        SQLEnum(*[c.value for c in BalanceCategory], name="enum_balance_items_category", validate_strings=True),
        nullable=False
    )
    balance_type = Column(
        SQLEnum(*[b.value for b in BalanceType], name="enum_balance_items_balance_type", validate_strings=True),
        nullable=False,
        default=BalanceType.ON_BALANCE_SHEET.value,
        server_default=BalanceType.ON_BALANCE_SHEET.value
    )
    description = Column(Text, nullable=True)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<BalanceItem {self.code} - {self.balance_type}>"

    @property
    def is_off_balance_sheet(self) -> bool:
        return self.balance_type == BalanceType.OFF_BALANCE_SHEET.value
