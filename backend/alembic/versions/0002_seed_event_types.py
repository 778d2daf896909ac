"""seed_event_types

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18

Default event types shown in the calendar legend.
"""
import uuid
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_EVENT_TYPES = [
    ("Tree Planting", "bg-green-100"),
    ("Community Cleanup", "bg-blue-100"),
    ("Workshop", "bg-yellow-100"),
    ("Fundraiser", "bg-purple-100"),
    ("Nature Walk", "bg-teal-100"),
]

event_types = sa.table(
    "event_types",
    sa.column("id", sa.String),
    sa.column("name", sa.String),
    sa.column("color", sa.String),
)


def upgrade() -> None:
    op.bulk_insert(
        event_types,
        [{"id": str(uuid.uuid4()), "name": name, "color": color} for name, color in DEFAULT_EVENT_TYPES],
    )


def downgrade() -> None:
    names = [name for name, _ in DEFAULT_EVENT_TYPES]
    op.execute(event_types.delete().where(event_types.c.name.in_(names)))
