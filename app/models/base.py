"""Base Models and Mixins shared by billing tables"""

import uuid
from sqlalchemy import Column, DateTime, Integer, Numeric, String, ForeignKey
from sqlalchemy.dialects.postgresql import UUID, ENUM
from sqlalchemy.orm import declared_attr

from app.database import Base
from app.models.enums import PaymentStatus
from app.utils.time import get_utc_now

PROOF_URL_MAX_LENGTH = 1024


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class TenantScopedMixin:
    """
    Mixin for records owned by a tenant.

    Provides:
    - subject_id foreign key to tenants (many bills per tenant)
    """

    @declared_attr
    def subject_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("tenants.id", ondelete="RESTRICT"),
            nullable=False,
            index=True
        )


class BillingCycleMixin:
    """
    Lifecycle columns of a recurring bill.

    The same row is reused for every cycle: approval rewrites bill_date,
    due_date and original_due_date together. penalty is only ever written
    at creation and by the reconciliation job.
    """
    bill_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False, index=True)
    original_due_date = Column(DateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    penalty = Column(Numeric(12, 2), default=0, nullable=False)
    payment_term = Column(Integer, nullable=False)
    payment_proof_url = Column(String(PROOF_URL_MAX_LENGTH), nullable=True)

    @declared_attr
    def payment_status(cls):
        return Column(
            ENUM(
                PaymentStatus,
                name="payment_status",
                values_callable=lambda x: [e.value for e in x],
            ),
            default=PaymentStatus.PENDING,
            nullable=False,
            index=True,
        )
