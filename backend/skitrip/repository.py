from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Generator, List, Optional
from uuid import uuid4

from sqlalchemy import select

from .db import SessionLocal
from .models import GroupModel, ParticipantModel, RoomSelectionModel, VoteModel
from .schemas import (
    Group,
    GroupDetail,
    Participant,
    RoomDetails,
    RoomSelection,
    RoomSelectionInput,
    Vote,
    VoteRecord,
    VoteResult,
)

VOTE_SUBMITTED_MESSAGE = "Vote submitted successfully!"
VOTE_UPDATED_MESSAGE = "Vote updated successfully!"


def _group_from_model(model: GroupModel) -> Group:
    return Group(id=model.id, name=model.name, created_at=model.created_at, updated_at=model.updated_at)


def _participant_from_model(model: ParticipantModel, has_voted: bool) -> Participant:
    return Participant(
        id=model.id,
        group_id=model.group_id,
        name=model.name,
        email=model.email,
        avatar=model.avatar,
        has_voted=has_voted,
    )


def _vote_from_model(model: VoteModel) -> Vote:
    return Vote(
        id=model.id,
        participant_id=model.participant_id,
        group_id=model.group_id,
        destination_id=model.destination_id,
        destination_name=model.destination_name,
        hotel_id=model.hotel_id,
        hotel_name=model.hotel_name,
        created_at=model.created_at,
    )


def _room_selection_from_model(model: RoomSelectionModel, participant: Optional[ParticipantModel] = None) -> RoomSelection:
    return RoomSelection(
        id=model.id,
        participant_id=model.participant_id,
        group_id=model.group_id,
        destination_id=model.destination_id,
        destination_name=model.destination_name,
        hotel_id=model.hotel_id,
        hotel_name=model.hotel_name,
        room_id=model.room_id,
        room_name=model.room_name,
        room_details=RoomDetails.model_validate(model.room_details or {}),
        created_at=model.created_at,
        participant_name=participant.name if participant else None,
        participant_email=participant.email if participant else None,
    )


class SqlRepository:
    @contextmanager
    def session(self) -> Generator:
        db = SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _voted_participant_ids(db, group_id: str) -> set[str]:
        rows = db.execute(select(VoteModel.participant_id).where(VoteModel.group_id == group_id)).scalars().all()
        return set(rows)

    @staticmethod
    def _touch_group(db, group_id: str, now: datetime) -> None:
        group = db.get(GroupModel, group_id)
        if group:
            group.updated_at = now

    def create_group(self, name: str) -> Group:
        now = datetime.utcnow()
        with self.session() as db:
            model = GroupModel(id=str(uuid4()), name=name, created_at=now, updated_at=now)
            db.add(model)
            db.flush()
            return _group_from_model(model)

    def get_group(self, group_id: str) -> Optional[Group]:
        with self.session() as db:
            model = db.get(GroupModel, group_id)
            if not model:
                return None
            return _group_from_model(model)

    def get_group_detail(self, group_id: str) -> Optional[GroupDetail]:
        group = self.get_group(group_id)
        if not group:
            return None
        return GroupDetail(**group.model_dump(), participants=self.list_participants(group_id))

    def add_participant(
        self, group_id: str, name: str, email: str, avatar: Optional[str] = None
    ) -> Optional[Participant]:
        now = datetime.utcnow()
        with self.session() as db:
            group = db.get(GroupModel, group_id)
            if not group:
                return None

            model = ParticipantModel(
                id=str(uuid4()),
                group_id=group_id,
                name=name,
                email=email,
                avatar=avatar,
                created_at=now,
            )
            db.add(model)
            group.updated_at = now
            db.flush()
            return _participant_from_model(model, has_voted=False)

    def list_participants(self, group_id: str) -> List[Participant]:
        with self.session() as db:
            models = (
                db.execute(
                    select(ParticipantModel)
                    .where(ParticipantModel.group_id == group_id)
                    .order_by(ParticipantModel.name)
                )
                .scalars()
                .all()
            )
            voted = self._voted_participant_ids(db, group_id)
            return [_participant_from_model(p, has_voted=p.id in voted) for p in models]

    def submit_vote(
        self,
        participant_id: str,
        group_id: str,
        destination_id: str,
        destination_name: str,
        hotel_id: Optional[str] = None,
        hotel_name: Optional[str] = None,
    ) -> VoteResult:
        """Insert or overwrite the single vote a participant holds in a group.

        A vote without a hotel clears any hotel recorded by an earlier vote.
        "Has voted" is read back from this table, so there is no second write
        to keep in step with the vote row.
        """
        if not hotel_id:
            hotel_id = None
            hotel_name = None

        now = datetime.utcnow()
        with self.session() as db:
            model = db.execute(
                select(VoteModel).where(
                    VoteModel.participant_id == participant_id,
                    VoteModel.group_id == group_id,
                )
            ).scalar_one_or_none()

            updated = model is not None
            if model:
                model.destination_id = destination_id
                model.destination_name = destination_name
                model.hotel_id = hotel_id
                model.hotel_name = hotel_name
            else:
                model = VoteModel(
                    id=str(uuid4()),
                    participant_id=participant_id,
                    group_id=group_id,
                    destination_id=destination_id,
                    destination_name=destination_name,
                    hotel_id=hotel_id,
                    hotel_name=hotel_name,
                    created_at=now,
                )
                db.add(model)

            self._touch_group(db, group_id, now)
            db.flush()
            return VoteResult(
                updated=updated,
                message=VOTE_UPDATED_MESSAGE if updated else VOTE_SUBMITTED_MESSAGE,
                vote=_vote_from_model(model),
            )

    def list_votes(self, group_id: str) -> List[Vote]:
        with self.session() as db:
            models = (
                db.execute(select(VoteModel).where(VoteModel.group_id == group_id).order_by(VoteModel.created_at))
                .scalars()
                .all()
            )
            return [_vote_from_model(model) for model in models]

    def get_vote_results(self, group_id: str) -> List[VoteRecord]:
        with self.session() as db:
            rows = db.execute(
                select(VoteModel, ParticipantModel)
                .join(ParticipantModel, ParticipantModel.id == VoteModel.participant_id)
                .where(VoteModel.group_id == group_id)
                .order_by(VoteModel.created_at)
            ).all()
            return [
                VoteRecord(
                    destination_id=vote.destination_id,
                    destination_name=vote.destination_name,
                    hotel_id=vote.hotel_id,
                    hotel_name=vote.hotel_name,
                    participant_id=participant.id,
                    participant_name=participant.name,
                    participant_avatar=participant.avatar,
                )
                for vote, participant in rows
            ]

    def save_room_selection(self, selection: RoomSelectionInput) -> RoomSelection:
        now = datetime.utcnow()
        details = selection.room_details.model_dump(by_alias=True, exclude_none=True)
        with self.session() as db:
            model = db.execute(
                select(RoomSelectionModel).where(
                    RoomSelectionModel.participant_id == selection.participant_id,
                    RoomSelectionModel.group_id == selection.group_id,
                    RoomSelectionModel.hotel_id == selection.hotel_id,
                )
            ).scalar_one_or_none()

            if model:
                model.destination_id = selection.destination_id
                model.destination_name = selection.destination_name
                model.hotel_name = selection.hotel_name
                model.room_id = selection.room_id
                model.room_name = selection.room_name
                model.room_details = details
                model.created_at = now
            else:
                model = RoomSelectionModel(
                    id=str(uuid4()),
                    participant_id=selection.participant_id,
                    group_id=selection.group_id,
                    destination_id=selection.destination_id,
                    destination_name=selection.destination_name,
                    hotel_id=selection.hotel_id,
                    hotel_name=selection.hotel_name,
                    room_id=selection.room_id,
                    room_name=selection.room_name,
                    room_details=details,
                    created_at=now,
                )
                db.add(model)

            self._touch_group(db, selection.group_id, now)
            db.flush()
            return _room_selection_from_model(model)

    def get_user_room_selection(self, participant_id: str, group_id: str, hotel_id: str) -> Optional[RoomSelection]:
        with self.session() as db:
            model = db.execute(
                select(RoomSelectionModel).where(
                    RoomSelectionModel.participant_id == participant_id,
                    RoomSelectionModel.group_id == group_id,
                    RoomSelectionModel.hotel_id == hotel_id,
                )
            ).scalar_one_or_none()
            if not model:
                return None
            return _room_selection_from_model(model)

    def list_room_selections(self, group_id: str) -> List[RoomSelection]:
        with self.session() as db:
            rows = db.execute(
                select(RoomSelectionModel, ParticipantModel)
                .outerjoin(ParticipantModel, ParticipantModel.id == RoomSelectionModel.participant_id)
                .where(RoomSelectionModel.group_id == group_id)
                .order_by(RoomSelectionModel.created_at.desc())
            ).all()
            return [_room_selection_from_model(selection, participant) for selection, participant in rows]
