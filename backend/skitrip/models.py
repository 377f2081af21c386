from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .db import Base


class GroupModel(Base):
    __tablename__ = "trip_groups"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    participants = relationship("ParticipantModel", back_populates="group", cascade="all, delete-orphan")


class ParticipantModel(Base):
    __tablename__ = "trip_participants"

    id = Column(String, primary_key=True, index=True)
    group_id = Column(String, ForeignKey("trip_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    avatar = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)

    group = relationship("GroupModel", back_populates="participants")


class VoteModel(Base):
    __tablename__ = "trip_votes"
    __table_args__ = (UniqueConstraint("participant_id", "group_id", name="uq_vote_participant_group"),)

    id = Column(String, primary_key=True)
    participant_id = Column(String, ForeignKey("trip_participants.id", ondelete="CASCADE"), nullable=False)
    group_id = Column(String, ForeignKey("trip_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    destination_id = Column(String, nullable=False)
    destination_name = Column(String, nullable=False)
    hotel_id = Column(String, nullable=True)
    hotel_name = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)

    participant = relationship("ParticipantModel")


class RoomSelectionModel(Base):
    __tablename__ = "trip_room_selections"
    __table_args__ = (
        UniqueConstraint("participant_id", "group_id", "hotel_id", name="uq_room_selection_participant_group_hotel"),
    )

    id = Column(String, primary_key=True)
    participant_id = Column(String, ForeignKey("trip_participants.id", ondelete="CASCADE"), nullable=False)
    group_id = Column(String, ForeignKey("trip_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    destination_id = Column(String, nullable=False)
    destination_name = Column(String, nullable=False)
    hotel_id = Column(String, nullable=False)
    hotel_name = Column(String, nullable=False)
    room_id = Column(String, nullable=False)
    room_name = Column(String, nullable=False)
    room_details = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False)

    participant = relationship("ParticipantModel")
