"""create gym finance schema

Revision ID: 4c1e7b9a2d30
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e7b9a2d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
    )
    op.create_index("ix_roles_id", "roles", ["id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True, unique=True),
        sa.Column("hashed_password", sa.String(), nullable=True),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False, unique=True),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("enrollment_status", sa.String(), nullable=False, server_default="active"),
        sa.Column("enrollment_date", sa.Date(), nullable=True),
        sa.Column("freeze_start_date", sa.Date(), nullable=True),
        sa.Column("freeze_end_date", sa.Date(), nullable=True),
        sa.Column("monthly_fee", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_profiles_id", "profiles", ["id"])

    op.create_table(
        "payment_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("installments", sa.Integer(), nullable=False),
        sa.Column("installment_amount", sa.Float(), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(), nullable=False, server_default="active"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_payment_plans_id", "payment_plans", ["id"])
    op.create_index("ix_payment_plans_client_id", "payment_plans", ["client_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("payment_plans.id"), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("late_fee", sa.Float(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("payment_method", sa.String(), nullable=False, server_default="pending"),
        sa.Column("receipt_number", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("installment_number", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_installments", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_payments_id", "payments", ["id"])
    op.create_index("ix_payments_client_id", "payments", ["client_id"])
    op.create_index("ix_payments_plan_id", "payments", ["plan_id"])

    op.create_table(
        "access_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("check_in_at", sa.DateTime(), nullable=True),
        sa.Column("check_out_at", sa.DateTime(), nullable=True),
        sa.Column("access_method", sa.String(), nullable=False, server_default="manual"),
    )
    op.create_index("ix_access_logs_id", "access_logs", ["id"])
    op.create_index("ix_access_logs_profile_id", "access_logs", ["profile_id"])

    op.create_table(
        "instructor_clients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("instructor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
    )
    op.create_index("ix_instructor_clients_id", "instructor_clients", ["id"])
    op.create_index("ix_instructor_clients_client_id", "instructor_clients", ["client_id"])

    op.create_table(
        "deleted_items_trash",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("original_table", sa.String(), nullable=False),
        sa.Column("original_id", sa.Integer(), nullable=False),
        sa.Column("item_data", sa.JSON(), nullable=False),
        sa.Column("deleted_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("auto_purge_at", sa.DateTime(), nullable=False),
        sa.Column("restore_attempted_at", sa.DateTime(), nullable=True),
        sa.Column("permanently_deleted_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_deleted_items_trash_id", "deleted_items_trash", ["id"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_audit_logs_id", "audit_logs", ["id"])
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])

    op.bulk_insert(
        roles,
        [
            {"name": "admin"},
            {"name": "instructor"},
            {"name": "client"},
        ],
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("deleted_items_trash")
    op.drop_table("instructor_clients")
    op.drop_table("access_logs")
    op.drop_table("payments")
    op.drop_table("payment_plans")
    op.drop_table("profiles")
    op.drop_table("users")
    op.drop_table("roles")
