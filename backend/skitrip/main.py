from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401
from .config import (
    DESTINATION_CACHE_TTL_SECONDS,
    LITEAPI_BASE_URL,
    LITEAPI_TIMEOUT_SECONDS,
    load_cors_origin_regex,
    load_cors_origins,
    load_liteapi_key,
)
from .db import Base, engine as db_engine
from .destinations import DestinationCatalog
from .hotels import HotelLookup
from .liteapi_client import LiteApiClient
from .logger import logger
from .repository import SqlRepository
from .schemas import (
    DestinationListResponse,
    ErrorResponse,
    GroupCreateRequest,
    GroupDetailResponse,
    GroupResponse,
    HotelDetailsResponse,
    HotelListResponse,
    ParticipantCreateRequest,
    ParticipantListResponse,
    ParticipantResponse,
    RoomSelectionInput,
    RoomSelectionListResponse,
    RoomSelectionResponse,
    VoteCreateRequest,
    VoteListResponse,
    VoteResultsResponse,
    VoteSubmitResponse,
)
from .tally import UNKNOWN_DESTINATION_NAME, tally_votes

ROOM_SELECTION_SAVED_MESSAGE = "Room selection saved successfully!"


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(
        "Starting ski trip API (cors_origins=%s, cors_origin_regex=%s)",
        CORS_ORIGINS,
        CORS_ORIGIN_REGEX,
    )
    Base.metadata.create_all(bind=db_engine)
    yield


CORS_ORIGINS = load_cors_origins()
CORS_ORIGIN_REGEX = load_cors_origin_regex()

app = FastAPI(title="Ski Trip Group Voting API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = SqlRepository()
liteapi_client = LiteApiClient(
    api_key=load_liteapi_key(),
    base_url=LITEAPI_BASE_URL,
    timeout_seconds=LITEAPI_TIMEOUT_SECONDS,
)
catalog = DestinationCatalog(fetcher=liteapi_client.fetch_destinations, ttl_seconds=DESTINATION_CACHE_TTL_SECONDS)
hotel_lookup = HotelLookup(liteapi_client)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in {"body", "query"})
        problems.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return _error_response(400, "; ".join(problems) or "Invalid request")


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(500, "A database error occurred, please try again")


def _resolve_vote_labels(destination_id: str, hotel_id: Optional[str]) -> tuple[str, Optional[str]]:
    with ThreadPoolExecutor(max_workers=2) as executor:
        destination_future = executor.submit(catalog.find, destination_id)
        hotel_future = executor.submit(hotel_lookup.find_hotel, destination_id, hotel_id) if hotel_id else None
        destination = destination_future.result()
        hotel = hotel_future.result() if hotel_future else None

    if not destination:
        logger.warning("Could not resolve destination name for '%s'", destination_id)
    if hotel_id and not hotel:
        logger.warning("Could not resolve hotel name for '%s'", hotel_id)
    return (destination.name if destination else UNKNOWN_DESTINATION_NAME), (hotel.name if hotel else None)


@app.get("/api/destinations", response_model=DestinationListResponse)
def list_destinations():
    result = catalog.load()
    return DestinationListResponse(data=result.destinations, source=result.source)


@app.post("/api/destinations/refresh", response_model=DestinationListResponse)
def refresh_destinations():
    result = catalog.refresh_destinations()
    return DestinationListResponse(data=result.destinations, source=result.source)


@app.get("/api/hotels", response_model=HotelListResponse)
def search_hotels(
    destination_id: str = Query(alias="destinationId", min_length=1),
    checkin: Optional[str] = None,
    checkout: Optional[str] = None,
    guests: int = Query(default=2, ge=1, le=20),
):
    result = hotel_lookup.search_hotels(destination_id, checkin=checkin or None, checkout=checkout or None, guests=guests)
    return HotelListResponse(data=result.hotels, source=result.source, pricing=result.pricing)


@app.get("/api/hotel-details", response_model=HotelDetailsResponse)
def get_hotel_details(hotel_id: str = Query(alias="hotelId", min_length=1)):
    result = hotel_lookup.get_hotel_details(hotel_id)
    return HotelDetailsResponse(data=result.details, source=result.source)


@app.post("/api/groups", response_model=GroupResponse, status_code=201)
def create_group(payload: GroupCreateRequest):
    group = store.create_group(payload.name)
    logger.info("Created group %s", group.id)
    return GroupResponse(data=group)


@app.get("/api/groups", response_model=GroupDetailResponse)
def get_group(group_id: str = Query(alias="id", min_length=1)):
    group = store.get_group_detail(group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return GroupDetailResponse(data=group)


@app.post("/api/participants", response_model=ParticipantResponse, status_code=201)
def add_participant(payload: ParticipantCreateRequest):
    participant = store.add_participant(payload.group_id, payload.name, payload.email, payload.avatar)
    if not participant:
        raise HTTPException(status_code=404, detail="Group not found")
    return ParticipantResponse(data=participant)


@app.get("/api/participants", response_model=ParticipantListResponse)
def list_participants(group_id: str = Query(alias="groupId", min_length=1)):
    if not store.get_group(group_id):
        raise HTTPException(status_code=404, detail="Group not found")
    return ParticipantListResponse(data=store.list_participants(group_id))


@app.post("/api/votes", response_model=VoteSubmitResponse)
def submit_vote(payload: VoteCreateRequest):
    destination_name, hotel_name = _resolve_vote_labels(payload.destination_id, payload.hotel_id)
    result = store.submit_vote(
        participant_id=payload.participant_id,
        group_id=payload.group_id,
        destination_id=payload.destination_id,
        destination_name=destination_name,
        hotel_id=payload.hotel_id,
        hotel_name=hotel_name,
    )
    logger.info(
        "Vote %s for participant %s in group %s",
        "updated" if result.updated else "recorded",
        payload.participant_id,
        payload.group_id,
    )
    return VoteSubmitResponse(message=result.message, data=result.vote)


@app.get("/api/votes", response_model=VoteListResponse)
def list_votes(group_id: str = Query(alias="groupId", min_length=1)):
    return VoteListResponse(data=store.list_votes(group_id))


@app.get("/api/votes/results", response_model=VoteResultsResponse)
def get_vote_results(group_id: str = Query(alias="groupId", min_length=1)):
    return VoteResultsResponse(data=tally_votes(store.get_vote_results(group_id)))


@app.post("/api/room-selections", response_model=RoomSelectionResponse)
def save_room_selection(payload: RoomSelectionInput):
    selection = store.save_room_selection(payload)
    return RoomSelectionResponse(message=ROOM_SELECTION_SAVED_MESSAGE, data=selection)


@app.get("/api/room-selections", response_model=RoomSelectionListResponse)
def list_room_selections(group_id: str = Query(alias="groupId", min_length=1)):
    return RoomSelectionListResponse(data=store.list_room_selections(group_id))


@app.get("/api/room-selections/user", response_model=RoomSelectionResponse)
def get_user_room_selection(
    participant_id: str = Query(alias="participantId", min_length=1),
    group_id: str = Query(alias="groupId", min_length=1),
    hotel_id: str = Query(alias="hotelId", min_length=1),
):
    return RoomSelectionResponse(data=store.get_user_room_selection(participant_id, group_id, hotel_id))


@app.get("/health")
def health():
    return {
        "status": "ok",
        "cors_allow_origins": CORS_ORIGINS,
        "cors_allow_origin_regex": CORS_ORIGIN_REGEX,
    }
