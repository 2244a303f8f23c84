"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

product_status = sa.Enum(
    "ACTIVE", "REPORTED", "SUSPENDED", "BANNED", "DELETED", "DEACTIVATED",
    name="productstatus",
)
product_type = sa.Enum("PRODUCT", "SERVICE", name="producttype")
category = sa.Enum(
    "ELECTRONICS", "HOME", "FASHION", "SPORTS", "AUTOMOTIVE", "TOYS", "BOOKS", "SERVICES", "OTHER",
    name="category",
)
report_type = sa.Enum("DANGEROUS", "FRAUD", "INAPPROPRIATE", "OTHER", name="reporttype")
incident_status = sa.Enum("PENDING", "ACCEPTED", "REJECTED", "APPEALED", name="incidentstatus")
incident_phase = sa.Enum("INITIAL", "APPEAL", name="incidentphase")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("national_id", sa.String(length=20), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="CLIENT"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_national_id", "users", ["national_id"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=40), nullable=False, unique=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("type", product_type, nullable=False),
        sa.Column("category", category, nullable=False),
        sa.Column("status", product_status, nullable=False),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("address_type", sa.String(length=50), nullable=True),
        sa.Column("service_hours", sa.String(length=100), nullable=True),
        sa.Column("availability", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("publish_date", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("deleted_at", sa.TIMESTAMP(), nullable=True),
    )
    op.create_index("ix_products_id", "products", ["id"])
    op.create_index("ix_products_status", "products", ["status"])
    op.create_index("ix_products_user_id", "products", ["user_id"])

    op.create_table(
        "product_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("url", sa.String(length=1000), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_product_images_product_id", "product_images", ["product_id"])

    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "product_id", name="uq_likes_user_product"),
    )
    op.create_index("ix_likes_user_id", "likes", ["user_id"])
    op.create_index("ix_likes_product_id", "likes", ["product_id"])

    op.create_table(
        "incidents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("type", report_type, nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("reporter_id", sa.String(length=36), nullable=False),
        sa.Column("status", incident_status, nullable=False),
        sa.Column("phase", incident_phase, nullable=False),
        sa.Column("moderator_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("appeal_moderator_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("appeal_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_incidents_product_id", "incidents", ["product_id"])
    op.create_index("ix_incidents_reporter_id", "incidents", ["reporter_id"])
    op.create_index("ix_incidents_status", "incidents", ["status"])
    op.create_index("ix_incidents_moderator_id", "incidents", ["moderator_id"])
    op.create_index("ix_incidents_appeal_moderator_id", "incidents", ["appeal_moderator_id"])


def downgrade() -> None:
    op.drop_table("incidents")
    op.drop_table("likes")
    op.drop_table("product_images")
    op.drop_table("products")
    op.drop_table("users")
    for enum_type in (incident_phase, incident_status, report_type, category, product_type, product_status):
        enum_type.drop(op.get_bind(), checkfirst=True)
