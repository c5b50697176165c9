"""create booking_rules, reservations, blocked_dates tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261001_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "booking_rules",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_high_season", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("high_season_start_month", sa.Integer(), nullable=True),
        sa.Column("high_season_end_month", sa.Integer(), nullable=True),
        sa.Column("minimum_stay_days", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "enforce_gap_between_bookings",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("minimum_gap_days", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "(high_season_start_month IS NULL) = (high_season_end_month IS NULL)",
            name="ck_booking_rules_months_together",
        ),
        sa.CheckConstraint("minimum_stay_days >= 1", name="ck_booking_rules_min_stay"),
    )
    op.create_index("ix_booking_rules_is_active", "booking_rules", ["is_active"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("locality", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("number_of_people", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("end_date > start_date", name="ck_reservations_range"),
    )
    op.create_index(
        "idx_reservations_status_dates",
        "reservations",
        ["status", "start_date", "end_date"],
    )

    op.create_table(
        "blocked_dates",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("end_date > start_date", name="ck_blocked_dates_range"),
    )
    op.create_index("idx_blocked_dates_range", "blocked_dates", ["start_date", "end_date"])


def downgrade() -> None:
    op.drop_index("idx_blocked_dates_range", table_name="blocked_dates")
    op.drop_table("blocked_dates")
    op.drop_index("idx_reservations_status_dates", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_booking_rules_is_active", table_name="booking_rules")
    op.drop_table("booking_rules")
