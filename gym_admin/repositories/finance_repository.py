from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload

from gym_admin.models.access_log import AccessLog
from gym_admin.models.instructor_client import InstructorClient
from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan
from gym_admin.models.profile import Profile
from gym_admin.models.trash import DeletedItemTrash


class FinanceRepository:
    def __init__(self, db: Session):
        self.db = db

    # ---------------- PROFILES ----------------

    def get_profile(self, client_id: int) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.id == client_id).first()

    def deactivate_instructor_links(self, client_id: int) -> int:
        return (
            self.db.query(InstructorClient)
            .filter(
                InstructorClient.client_id == client_id,
                InstructorClient.is_active.is_(True),
            )
            .update({InstructorClient.is_active: False}, synchronize_session=False)
        )

    # ---------------- PAYMENTS ----------------

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def list_client_payments(self, client_id: int) -> list[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.client_id == client_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    def list_plan_payments(self, plan_id: int) -> list[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.plan_id == plan_id)
            .order_by(Payment.installment_number.asc())
            .all()
        )

    def count_plan_payments(self, plan_id: int, status: str) -> int:
        return (
            self.db.query(Payment)
            .filter(Payment.plan_id == plan_id, Payment.status == status)
            .count()
        )

    def find_paid_payment_on_day(
        self,
        client_id: int,
        description: str,
        amount: float,
        day: date,
    ) -> Optional[Payment]:
        start = datetime.combine(day, time.min)
        return (
            self.db.query(Payment)
            .filter(
                Payment.client_id == client_id,
                Payment.description == description,
                Payment.amount == amount,
                Payment.status == "paid",
                Payment.paid_at >= start,
                Payment.paid_at < start + timedelta(days=1),
            )
            .first()
        )

    def list_overdue_payments(self, today: date) -> list[Payment]:
        return (
            self.db.query(Payment)
            .options(joinedload(Payment.client))
            .filter(
                Payment.status == "pending",
                Payment.due_date.isnot(None),
                Payment.due_date < today,
            )
            .order_by(Payment.due_date.asc(), Payment.id.asc())
            .all()
        )

    def add_payment(self, payment: Payment) -> Payment:
        self.db.add(payment)
        self.db.flush()
        return payment

    def add_payments(self, payments: Iterable[Payment]) -> list[Payment]:
        payments = list(payments)
        self.db.add_all(payments)
        self.db.flush()
        return payments

    def update_client_payments_status(
        self,
        client_id: int,
        from_statuses: list[str],
        to_status: str,
    ) -> int:
        return (
            self.db.query(Payment)
            .filter(
                Payment.client_id == client_id,
                Payment.status.in_(from_statuses),
            )
            .update({Payment.status: to_status}, synchronize_session=False)
        )

    def delete_payments(self, payment_ids: list[int]) -> int:
        if not payment_ids:
            return 0
        return (
            self.db.query(Payment)
            .filter(Payment.id.in_(payment_ids))
            .delete(synchronize_session=False)
        )

    def delete_payments_for_plans(self, plan_ids: list[int]) -> int:
        if not plan_ids:
            return 0
        return (
            self.db.query(Payment)
            .filter(Payment.plan_id.in_(plan_ids))
            .delete(synchronize_session=False)
        )

    # ---------------- PLANS ----------------

    def get_plan(self, plan_id: int) -> Optional[PaymentPlan]:
        return self.db.query(PaymentPlan).filter(PaymentPlan.id == plan_id).first()

    def list_client_plans(self, client_id: int) -> list[PaymentPlan]:
        return (
            self.db.query(PaymentPlan)
            .filter(PaymentPlan.client_id == client_id)
            .order_by(PaymentPlan.created_at.desc(), PaymentPlan.id.desc())
            .all()
        )

    def list_plans(self, client_id: Optional[int] = None) -> list[PaymentPlan]:
        query = self.db.query(PaymentPlan)
        if client_id is not None:
            query = query.filter(PaymentPlan.client_id == client_id)
        return query.order_by(PaymentPlan.created_at.desc(), PaymentPlan.id.desc()).all()

    def add_plan(self, plan: PaymentPlan) -> PaymentPlan:
        self.db.add(plan)
        self.db.flush()
        return plan

    def update_client_plans_status(
        self,
        client_id: int,
        from_statuses: list[str],
        to_status: str,
    ) -> int:
        return (
            self.db.query(PaymentPlan)
            .filter(
                PaymentPlan.client_id == client_id,
                PaymentPlan.status.in_(from_statuses),
            )
            .update({PaymentPlan.status: to_status}, synchronize_session=False)
        )

    def delete_plans(self, plan_ids: list[int]) -> int:
        if not plan_ids:
            return 0
        return (
            self.db.query(PaymentPlan)
            .filter(PaymentPlan.id.in_(plan_ids))
            .delete(synchronize_session=False)
        )

    # ---------------- ACCESS LOGS ----------------

    def list_access_logs(self, profile_id: int, limit: int = 50) -> list[AccessLog]:
        return (
            self.db.query(AccessLog)
            .filter(AccessLog.profile_id == profile_id)
            .order_by(AccessLog.check_in_at.desc())
            .limit(limit)
            .all()
        )

    # ---------------- TRASH ----------------

    def add_trash_item(self, item: DeletedItemTrash) -> DeletedItemTrash:
        self.db.add(item)
        self.db.flush()
        return item

    def get_trash_item(self, item_id: int) -> Optional[DeletedItemTrash]:
        return (
            self.db.query(DeletedItemTrash)
            .filter(DeletedItemTrash.id == item_id)
            .first()
        )

    def list_active_trash(self) -> list[DeletedItemTrash]:
        return (
            self.db.query(DeletedItemTrash)
            .filter(DeletedItemTrash.permanently_deleted_at.is_(None))
            .order_by(DeletedItemTrash.deleted_at.desc(), DeletedItemTrash.id.desc())
            .all()
        )

    def purge_active_trash(self, when: datetime) -> int:
        return (
            self.db.query(DeletedItemTrash)
            .filter(DeletedItemTrash.permanently_deleted_at.is_(None))
            .update(
                {DeletedItemTrash.permanently_deleted_at: when},
                synchronize_session=False,
            )
        )

    # ---------------- TRANSACTIONS ----------------

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, instance) -> None:
        self.db.refresh(instance)
