"""SrpRequest model"""
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Column, DateTime, Integer, Numeric, String, Text

from eve_srp.database import Base

SRP_STATUSES = ("pending", "approved", "rejected")


class SrpRequest(Base):
    """One reimbursement claim for a ship loss.

    ``killmail_id`` is unique across all owners; the database constraint is what
    rejects racing duplicate submissions. ``payout_amount`` is non-zero only while
    ``status == "approved"``.
    """

    __tablename__ = "srp_requests"

    id = Column(Integer, primary_key=True, index=True)
    char_id = Column(BigInteger, nullable=False, index=True)
    char_name = Column(String(255), nullable=False)
    killmail_id = Column(BigInteger, nullable=False, unique=True)
    ship_type_id = Column(Integer, nullable=False)
    zkill_url = Column(String(255), nullable=False)
    player_comment = Column(Text, nullable=True)
    status = Column(String(20), default="pending", nullable=False, index=True)  # pending | approved | rejected
    payout_amount = Column(Numeric(20, 2), default=Decimal("0"), nullable=False)
    admin_comment = Column(Text, nullable=True)
    reviewed_by = Column(String(32), nullable=True)   # admin username
    reviewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
