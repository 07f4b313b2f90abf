from alembic import op
import sqlalchemy as sa

from cartelera.core.config import settings

revision = "0001_create_cartelera"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        settings.listings_table,
        sa.Column("imdbID", sa.String(length=50), primary_key=True),
        sa.Column("Title", sa.String(length=255), nullable=False),
        sa.Column("Year", sa.String(length=10), nullable=False),
        sa.Column("Type", sa.String(length=50), nullable=True),
        sa.Column("Poster", sa.String(length=500), nullable=True),
        sa.Column("Estado", sa.Boolean(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("Ubication", sa.String(length=100), nullable=True),
    )


def downgrade():
    op.drop_table(settings.listings_table)
