"""init tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "trip_groups",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_trip_groups_id"), "trip_groups", ["id"], unique=False)

    op.create_table(
        "trip_participants",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("avatar", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["group_id"], ["trip_groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_trip_participants_id"), "trip_participants", ["id"], unique=False)
    op.create_index(op.f("ix_trip_participants_group_id"), "trip_participants", ["group_id"], unique=False)

    op.create_table(
        "trip_votes",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("participant_id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("destination_id", sa.String(), nullable=False),
        sa.Column("destination_name", sa.String(), nullable=False),
        sa.Column("hotel_id", sa.String(), nullable=True),
        sa.Column("hotel_name", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["participant_id"], ["trip_participants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["group_id"], ["trip_groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("participant_id", "group_id", name="uq_vote_participant_group"),
    )
    op.create_index(op.f("ix_trip_votes_group_id"), "trip_votes", ["group_id"], unique=False)

    op.create_table(
        "trip_room_selections",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("participant_id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("destination_id", sa.String(), nullable=False),
        sa.Column("destination_name", sa.String(), nullable=False),
        sa.Column("hotel_id", sa.String(), nullable=False),
        sa.Column("hotel_name", sa.String(), nullable=False),
        sa.Column("room_id", sa.String(), nullable=False),
        sa.Column("room_name", sa.String(), nullable=False),
        sa.Column("room_details", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["participant_id"], ["trip_participants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["group_id"], ["trip_groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "participant_id", "group_id", "hotel_id", name="uq_room_selection_participant_group_hotel"
        ),
    )
    op.create_index(op.f("ix_trip_room_selections_group_id"), "trip_room_selections", ["group_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_trip_room_selections_group_id"), table_name="trip_room_selections")
    op.drop_table("trip_room_selections")
    op.drop_index(op.f("ix_trip_votes_group_id"), table_name="trip_votes")
    op.drop_table("trip_votes")
    op.drop_index(op.f("ix_trip_participants_group_id"), table_name="trip_participants")
    op.drop_index(op.f("ix_trip_participants_id"), table_name="trip_participants")
    op.drop_table("trip_participants")
    op.drop_index(op.f("ix_trip_groups_id"), table_name="trip_groups")
    op.drop_table("trip_groups")
