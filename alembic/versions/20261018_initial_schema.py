"""Initial schema: joints, sellers, assignments, ledger streams, events

Revision ID: 20261018_initial
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_initial"
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column("id", sa.String(length=36), nullable=False)


def _created_at():
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("(CURRENT_TIMESTAMP)"),
        nullable=False,
    )


def _index(table, *columns):
    for column in columns:
        op.create_index(f"ix_{table}_{column}", table, [column], unique=False)


def upgrade():
    op.create_table(
        "joints",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("joints", "name", "created_at")

    op.create_table(
        "suppliers",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone_whatsapp", sa.String(length=50), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("suppliers", "name", "created_at")

    op.create_table(
        "sellers",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("pin_hash", sa.String(length=100), nullable=True),
        sa.Column("joint_id", sa.String(length=36), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("sellers", "name", "created_at")

    op.create_table(
        "seller_assignments",
        _id(),
        sa.Column("seller_id", sa.String(length=36), nullable=False),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("seller_assignments", "seller_id", "joint_id", "start_at", "created_at")

    op.create_table(
        "deliveries",
        _id(),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("supplier_id", sa.String(length=36), nullable=True),
        sa.Column("qty", sa.Float(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("deliveries", "joint_id", "created_at")

    op.create_table(
        "allocations",
        _id(),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=False),
        sa.Column("qty_basis", sa.Float(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("allocations", "joint_id", "seller_id", "created_at")

    op.create_table(
        "payments",
        _id(),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("confirmed_by_seller", sa.Boolean(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("payments", "joint_id", "seller_id", "created_at")

    op.create_table(
        "audits",
        _id(),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=True),
        sa.Column("counted_qty", sa.Float(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.ForeignKeyConstraint(["seller_id"], ["sellers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("audits", "joint_id", "seller_id", "created_at")

    op.create_table(
        "events",
        _id(),
        sa.Column("joint_id", sa.String(length=36), nullable=False),
        sa.Column("event_ts", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=True),
        sa.Column("customer_phone", sa.String(length=50), nullable=True),
        sa.Column("location_note", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["joint_id"], ["joints.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("events", "joint_id", "event_ts", "created_at")

    op.create_table(
        "event_pricing",
        _id(),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("unit_qty", sa.Float(), nullable=False),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("delivery_fee", sa.Float(), nullable=False),
        sa.Column("opening_fee", sa.Float(), nullable=False),
        sa.Column("other_fee", sa.Float(), nullable=False),
        sa.Column("other_fee_note", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id"),
    )
    _index("event_pricing", "created_at")


def downgrade():
    for table in (
        "event_pricing",
        "events",
        "audits",
        "payments",
        "allocations",
        "deliveries",
        "seller_assignments",
        "sellers",
        "suppliers",
        "joints",
    ):
        op.drop_table(table)
