"""Create the ninja registry table.

- ninja (integer identity primary key)
- indexes on village and rank, the most common search filters
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1d9a7e5b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ninja",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("village", sa.String(length=50), nullable=False),
        sa.Column("clan", sa.String(length=50), nullable=True),
        sa.Column("rank", sa.String(length=20), nullable=False),
        sa.Column("chakra_type", sa.String(length=30), nullable=False),
        sa.Column("specialty", sa.String(length=50), nullable=True),
        sa.Column("bloodline_trait", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=True, server_default="Active"),
        sa.Column("strength_level", sa.Integer(), nullable=True),
        sa.Column("registration_date", sa.Date(), nullable=True, server_default=sa.text("CURRENT_DATE")),
        sa.PrimaryKeyConstraint("id", name="pk_ninja"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_ninja_village", "ninja", ["village"])
    op.create_index("ix_ninja_rank", "ninja", ["rank"])


def downgrade() -> None:
    op.drop_index("ix_ninja_rank", table_name="ninja")
    op.drop_index("ix_ninja_village", table_name="ninja")
    op.drop_table("ninja")
