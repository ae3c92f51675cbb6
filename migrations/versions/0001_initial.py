"""Initial schema: users, credit cards, balance history, audit log."""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "credit_cards",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("number", sa.String(length=32), nullable=False),
        sa.Column("issuance_bank", sa.String(length=100), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_credit_cards_number", "credit_cards", ["number"], unique=True)
    op.create_index("ix_credit_cards_user_id", "credit_cards", ["user_id"], unique=False)

    op.create_table(
        "balance_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "credit_card_id",
            sa.Integer(),
            sa.ForeignKey("credit_cards.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "credit_card_id", "date", name="uq_balance_history_card_date"
        ),
    )
    op.create_index(
        "ix_balance_history_credit_card_id",
        "balance_history",
        ["credit_card_id"],
        unique=False,
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("account_key", sa.String(length=32), nullable=True),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_log_account_key", "audit_log", ["account_key"], unique=False)


def downgrade():
    op.drop_index("ix_audit_log_account_key", table_name="audit_log")
    op.drop_table("audit_log")

    op.drop_index("ix_balance_history_credit_card_id", table_name="balance_history")
    op.drop_table("balance_history")

    op.drop_index("ix_credit_cards_user_id", table_name="credit_cards")
    op.drop_index("ix_credit_cards_number", table_name="credit_cards")
    op.drop_table("credit_cards")

    op.drop_table("users")
