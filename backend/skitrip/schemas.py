from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_required(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be blank")
    return text


class GroupCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=120)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str):
        return _strip_required(v)


class Group(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class ParticipantCreateRequest(CamelModel):
    group_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=254)
    avatar: Optional[str] = None

    @field_validator("name", "group_id")
    @classmethod
    def validate_required_text(cls, v: str):
        return _strip_required(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str):
        email = _strip_required(v)
        if "@" not in email:
            raise ValueError("email must contain '@'")
        return email


class Participant(CamelModel):
    id: str
    group_id: str
    name: str
    email: str
    avatar: Optional[str] = None
    has_voted: bool = False


class GroupDetail(Group):
    participants: List[Participant] = Field(default_factory=list)


class VoteCreateRequest(CamelModel):
    participant_id: str = Field(min_length=1)
    group_id: str = Field(min_length=1)
    destination_id: str = Field(min_length=1)
    hotel_id: Optional[str] = None

    @field_validator("hotel_id")
    @classmethod
    def blank_hotel_is_none(cls, v: Optional[str]):
        if v is None or not v.strip():
            return None
        return v.strip()


class Vote(CamelModel):
    id: str
    participant_id: str
    group_id: str
    destination_id: str
    destination_name: str
    hotel_id: Optional[str] = None
    hotel_name: Optional[str] = None
    created_at: datetime


class VoteResult(CamelModel):
    updated: bool
    message: str
    vote: Vote


class VoteRecord(CamelModel):
    destination_id: str
    destination_name: str
    hotel_id: Optional[str] = None
    hotel_name: Optional[str] = None
    participant_id: str
    participant_name: str
    participant_avatar: Optional[str] = None


class VoteParticipant(CamelModel):
    id: str
    name: str


class VoteGroup(CamelModel):
    key: str
    destination_id: str
    destination_name: str
    hotel_id: Optional[str] = None
    hotel_name: Optional[str] = None
    count: int
    participants: List[VoteParticipant] = Field(default_factory=list)


class Destination(CamelModel):
    id: str
    name: str
    location: str
    description: str
    image_url: str
    base_price_per_person: float


class Hotel(CamelModel):
    id: str
    name: str
    price_per_night: float
    rating: Optional[float] = None
    amenities: List[str] = Field(default_factory=list)
    image_url: str
    destination_id: str
    hotel_description: Optional[str] = None
    thumbnail: Optional[str] = None


class HotelDetails(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    description: Optional[str] = None
    hotel_description: Optional[str] = None
    images: List[Dict[str, Any]] = Field(default_factory=list)
    facilities: List[Dict[str, Any]] = Field(default_factory=list)
    rooms: List[Dict[str, Any]] = Field(default_factory=list)
    address: Optional[Dict[str, Any]] = None
    star_rating: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class BedType(CamelModel):
    quantity: int = 1
    bed_type: str
    bed_size: str = ""
    id: Optional[int] = None


class RoomAmenity(CamelModel):
    amenities_id: int
    name: str
    sort: int = 0


class RoomDetails(CamelModel):
    description: Optional[str] = None
    max_adults: Optional[int] = Field(default=None, ge=0)
    max_children: Optional[int] = Field(default=None, ge=0)
    max_occupancy: Optional[int] = Field(default=None, ge=0)
    room_size_square: Optional[float] = Field(default=None, ge=0)
    room_size_unit: Optional[str] = None
    bed_types: List[BedType] = Field(default_factory=list)
    room_amenities: List[RoomAmenity] = Field(default_factory=list)


class RoomSelectionInput(CamelModel):
    participant_id: str = Field(min_length=1)
    group_id: str = Field(min_length=1)
    destination_id: str = Field(min_length=1)
    destination_name: str = Field(min_length=1)
    hotel_id: str = Field(min_length=1)
    hotel_name: str = Field(min_length=1)
    room_id: str = Field(min_length=1)
    room_name: str = Field(min_length=1)
    room_details: RoomDetails = Field(default_factory=RoomDetails)


class RoomSelection(RoomSelectionInput):
    id: str
    created_at: datetime
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class DestinationListResponse(BaseModel):
    success: bool = True
    data: List[Destination]
    source: str


class HotelListResponse(BaseModel):
    success: bool = True
    data: List[Hotel]
    source: str
    pricing: Optional[str] = None


class HotelDetailsResponse(BaseModel):
    success: bool = True
    data: HotelDetails
    source: str


class GroupResponse(BaseModel):
    success: bool = True
    data: Group


class GroupDetailResponse(BaseModel):
    success: bool = True
    data: GroupDetail


class ParticipantResponse(BaseModel):
    success: bool = True
    data: Participant


class ParticipantListResponse(BaseModel):
    success: bool = True
    data: List[Participant]


class VoteSubmitResponse(BaseModel):
    success: bool = True
    message: str
    data: Vote


class VoteListResponse(BaseModel):
    success: bool = True
    data: List[Vote]


class VoteResultsResponse(BaseModel):
    success: bool = True
    data: List[VoteGroup]


class RoomSelectionResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Optional[RoomSelection] = None


class RoomSelectionListResponse(BaseModel):
    success: bool = True
    data: List[RoomSelection]
