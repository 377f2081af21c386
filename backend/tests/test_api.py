from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from skitrip import main as main_module
from skitrip.catalog_data import STATIC_DESTINATIONS
from skitrip.destinations import DestinationCatalog
from skitrip.hotels import HotelLookup
from skitrip.main import app


class FakeLiteApiClient:
    def __init__(self, hotels_by_destination=None) -> None:
        self.hotels_by_destination = hotels_by_destination or {}

    def fetch_city_hotels(self, destination_id, limit=None):
        return self.hotels_by_destination.get(destination_id, [])

    def fetch_rates(self, hotel_ids, checkin, checkout, guests):
        return {}

    def fetch_hotel_details(self, hotel_id):
        raise RuntimeError("details unavailable")


@pytest.fixture
def client(monkeypatch):
    fake = FakeLiteApiClient({"whistler": [{"id": "lp-fairmont", "name": "Fairmont Chateau Whistler", "star_rating": 5}]})
    monkeypatch.setattr(main_module, "catalog", DestinationCatalog(fetcher=lambda: list(STATIC_DESTINATIONS)))
    monkeypatch.setattr(main_module, "hotel_lookup", HotelLookup(fake))
    with TestClient(app) as test_client:
        yield test_client


def create_group(client: TestClient, name: str = "Ski Crew") -> dict:
    resp = client.post("/api/groups", json={"name": name})
    assert resp.status_code == 201
    return resp.json()["data"]


def add_participant(client: TestClient, group_id: str, name: str) -> dict:
    resp = client.post(
        "/api/participants",
        json={"groupId": group_id, "name": name, "email": f"{name.lower()}@example.com"},
    )
    assert resp.status_code == 201
    return resp.json()["data"]


def vote(client: TestClient, participant: dict, destination_id: str, hotel_id: str | None = None):
    payload = {"participantId": participant["id"], "groupId": participant["groupId"], "destinationId": destination_id}
    if hotel_id is not None:
        payload["hotelId"] = hotel_id
    return client.post("/api/votes", json=payload)


def test_group_and_participant_lifecycle(client):
    group = create_group(client, "Powder Hounds")
    assert group["name"] == "Powder Hounds"
    assert "createdAt" in group and "updatedAt" in group

    add_participant(client, group["id"], "Sarah")
    add_participant(client, group["id"], "Alex")

    group_resp = client.get("/api/groups", params={"id": group["id"]})
    assert group_resp.status_code == 200
    payload = group_resp.json()
    assert payload["success"] is True
    assert [p["name"] for p in payload["data"]["participants"]] == ["Alex", "Sarah"]
    assert all(p["hasVoted"] is False for p in payload["data"]["participants"])

    list_resp = client.get("/api/participants", params={"groupId": group["id"]})
    assert list_resp.status_code == 200
    assert len(list_resp.json()["data"]) == 2


def test_missing_required_fields_are_rejected_with_400(client):
    resp = client.post("/api/groups", json={})
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert "name" in resp.json()["error"]

    resp = client.post("/api/votes", json={"participantId": "p1", "groupId": "g1"})
    assert resp.status_code == 400
    assert "destinationId" in resp.json()["error"]

    resp = client.get("/api/hotels")
    assert resp.status_code == 400

    resp = client.post("/api/participants", json={"groupId": "g1", "name": "No Email"})
    assert resp.status_code == 400


def test_unknown_group_returns_404(client):
    resp = client.get("/api/groups", params={"id": "missing"})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Group not found"}

    resp = client.post("/api/participants", json={"groupId": "missing", "name": "Mike", "email": "mike@example.com"})
    assert resp.status_code == 404


def test_resubmitting_vote_overwrites_previous_choice(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")

    first = vote(client, sarah, "aspen", "aspen-lodge")
    assert first.status_code == 200
    assert first.json()["message"] == "Vote submitted successfully!"
    assert first.json()["data"]["destinationName"] == "Aspen Snowmass"
    assert first.json()["data"]["hotelName"] == "The Aspen Mountain Lodge"

    second = vote(client, sarah, "vail", "vail-inn")
    assert second.status_code == 200
    assert second.json()["message"] == "Vote updated successfully!"
    assert second.json()["data"]["id"] == first.json()["data"]["id"]

    votes = client.get("/api/votes", params={"groupId": group["id"]}).json()["data"]
    assert len(votes) == 1
    assert votes[0]["destinationId"] == "vail"
    assert votes[0]["hotelId"] == "vail-inn"
    assert votes[0]["hotelName"] == "Mountain View Inn"


def test_vote_without_hotel_clears_previous_hotel(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")

    vote(client, sarah, "aspen", "aspen-lodge")
    resp = vote(client, sarah, "aspen")

    assert resp.status_code == 200
    assert resp.json()["data"]["hotelId"] is None
    assert resp.json()["data"]["hotelName"] is None


def test_has_voted_is_derived_from_votes(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")
    add_participant(client, group["id"], "Mike")

    vote(client, sarah, "whistler", "lp-fairmont")

    participants = client.get("/api/participants", params={"groupId": group["id"]}).json()["data"]
    has_voted = {p["name"]: p["hasVoted"] for p in participants}
    assert has_voted == {"Mike": False, "Sarah": True}


def test_vote_resolves_live_hotel_name_and_unknown_destination(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")
    mike = add_participant(client, group["id"], "Mike")

    live = vote(client, sarah, "whistler", "lp-fairmont").json()["data"]
    assert live["destinationName"] == "Whistler Blackcomb"
    assert live["hotelName"] == "Fairmont Chateau Whistler"

    unknown = vote(client, mike, "zermatt", "zermatt-hut").json()["data"]
    assert unknown["destinationName"] == "Unknown Destination"
    assert unknown["hotelId"] == "zermatt-hut"
    assert unknown["hotelName"] is None


def test_vote_results_group_and_rank_votes(client):
    group = create_group(client)
    p1 = add_participant(client, group["id"], "P1")
    p2 = add_participant(client, group["id"], "P2")
    p3 = add_participant(client, group["id"], "P3")

    vote(client, p1, "aspen", "aspen-lodge")
    vote(client, p2, "aspen")
    vote(client, p3, "aspen", "aspen-lodge")

    resp = client.get("/api/votes/results", params={"groupId": group["id"]})
    assert resp.status_code == 200
    results = resp.json()["data"]
    assert [r["key"] for r in results] == ["aspen:aspen-lodge", "aspen:no-hotel"]
    assert results[0]["count"] == 2
    assert [p["name"] for p in results[0]["participants"]] == ["P1", "P3"]
    assert results[1]["count"] == 1
    assert [p["name"] for p in results[1]["participants"]] == ["P2"]


def test_vote_results_for_group_without_votes_is_empty(client):
    group = create_group(client)
    resp = client.get("/api/votes/results", params={"groupId": group["id"]})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}


def room_selection_payload(participant: dict, room_id: str, room_name: str) -> dict:
    return {
        "participantId": participant["id"],
        "groupId": participant["groupId"],
        "destinationId": "aspen",
        "destinationName": "Aspen Snowmass",
        "hotelId": "aspen-lodge",
        "hotelName": "The Aspen Mountain Lodge",
        "roomId": room_id,
        "roomName": room_name,
        "roomDetails": {
            "maxAdults": 2,
            "bedTypes": [{"quantity": 1, "bedType": "King", "bedSize": "193x203", "id": 7}],
        },
    }


def test_room_selection_not_yet_selected_is_success_with_null(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")

    resp = client.get(
        "/api/room-selections/user",
        params={"participantId": sarah["id"], "groupId": group["id"], "hotelId": "aspen-lodge"},
    )

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["data"] is None


def test_saving_room_selection_twice_keeps_one_row_with_latest_values(client):
    group = create_group(client)
    sarah = add_participant(client, group["id"], "Sarah")

    first = client.post("/api/room-selections", json=room_selection_payload(sarah, "r1", "Queen Room"))
    assert first.status_code == 200
    assert first.json()["message"] == "Room selection saved successfully!"

    second = client.post("/api/room-selections", json=room_selection_payload(sarah, "r2", "King Suite"))
    assert second.status_code == 200

    selections = client.get("/api/room-selections", params={"groupId": group["id"]}).json()["data"]
    assert len(selections) == 1
    assert selections[0]["roomId"] == "r2"
    assert selections[0]["roomName"] == "King Suite"
    assert selections[0]["participantName"] == "Sarah"

    mine = client.get(
        "/api/room-selections/user",
        params={"participantId": sarah["id"], "groupId": group["id"], "hotelId": "aspen-lodge"},
    ).json()["data"]
    assert mine["roomId"] == "r2"
    assert mine["roomDetails"]["bedTypes"][0]["bedType"] == "King"


def test_destinations_endpoint_reports_source(client, monkeypatch):
    resp = client.get("/api/destinations")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["source"] == "liteapi"
    assert [d["id"] for d in payload["data"]] == ["aspen", "whistler", "vail"]
    assert payload["data"][0]["basePricePerPerson"] == 450

    def failing_fetch():
        raise RuntimeError("upstream down")

    monkeypatch.setattr(main_module, "catalog", DestinationCatalog(fetcher=failing_fetch))
    resp = client.post("/api/destinations/refresh")
    assert resp.status_code == 200
    assert resp.json()["source"] == "mock_fallback"
    assert len(resp.json()["data"]) == 3


def test_hotels_endpoint_falls_back_to_static_data_when_live_is_empty(client):
    resp = client.get("/api/hotels", params={"destinationId": "aspen"})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["success"] is True
    assert payload["source"] == "mock"
    assert {h["id"] for h in payload["data"]} == {"aspen-lodge", "aspen-inn"}

    live = client.get("/api/hotels", params={"destinationId": "whistler", "checkin": "2027-01-10", "checkout": "2027-01-12"})
    assert live.json()["source"] == "liteapi"
    assert live.json()["pricing"] == "live"
    assert live.json()["data"][0]["pricePerNight"] == 400


def test_hotel_details_falls_back_to_placeholder(client):
    resp = client.get("/api/hotel-details", params={"hotelId": "lp-fairmont"})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["source"] == "fallback"
    assert payload["data"]["name"] == "Hotel Details Unavailable"


def test_store_failure_returns_generic_500(client, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def broken_list_votes(group_id):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr(main_module.store, "list_votes", broken_list_votes)
    resp = client.get("/api/votes", params={"groupId": "g1"})

    assert resp.status_code == 500
    assert resp.json()["success"] is False
