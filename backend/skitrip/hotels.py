from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .catalog_data import DEFAULT_HOTEL_IMAGE_URL, static_hotels_for
from .liteapi_client import LiteApiClient, LiteApiError
from .logger import logger
from .schemas import Hotel, HotelDetails

SOURCE_LIVE = "liteapi"
SOURCE_MOCK = "mock"
SOURCE_MOCK_FALLBACK = "mock_fallback"
SOURCE_DETAILS_FALLBACK = "fallback"
PRICING_LIVE = "live"
PRICING_BASE = "base"
DEFAULT_STAR_RATING = 3.0


@dataclass(frozen=True)
class HotelSearchResult:
    hotels: List[Hotel]
    source: str
    pricing: Optional[str] = None


@dataclass(frozen=True)
class HotelDetailsResult:
    details: HotelDetails
    source: str


def estimate_nightly_price(star_rating: Optional[float]) -> float:
    stars = star_rating if star_rating else DEFAULT_STAR_RATING
    return 150 + stars * 50


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _names(items: Any) -> List[str]:
    names: List[str] = []
    for item in items or []:
        if isinstance(item, str) and item.strip():
            names.append(item.strip())
        elif isinstance(item, dict) and item.get("name"):
            names.append(str(item["name"]))
    return names


def _first_image_url(hotel: dict) -> Optional[str]:
    for image in hotel.get("images") or []:
        if isinstance(image, str) and image:
            return image
        if isinstance(image, dict) and image.get("url"):
            return str(image["url"])
    return hotel.get("main_photo") or hotel.get("thumbnail") or None


def _as_dict_list(items: Any, key: str) -> List[dict]:
    result: List[dict] = []
    for item in items or []:
        if isinstance(item, dict):
            result.append(item)
        elif isinstance(item, str) and item:
            result.append({key: item})
    return result


def normalize_hotel(raw: dict, index: int, destination_id: str, rate: Optional[float] = None) -> Hotel:
    star_rating = _as_float(raw.get("star_rating") or raw.get("stars") or raw.get("rating"))
    description = raw.get("hotelDescription") or raw.get("description")
    return Hotel(
        id=str(raw.get("id") or f"liteapi-{index}"),
        name=str(raw.get("name") or f"Hotel {index + 1}"),
        price_per_night=rate if rate is not None else estimate_nightly_price(star_rating),
        rating=star_rating,
        amenities=_names(raw.get("amenities")) + _names(raw.get("facilities")),
        image_url=_first_image_url(raw) or DEFAULT_HOTEL_IMAGE_URL,
        destination_id=destination_id,
        hotel_description=description if isinstance(description, str) else None,
        thumbnail=raw.get("thumbnail") if isinstance(raw.get("thumbnail"), str) else None,
    )


def normalize_hotel_details(raw: dict, hotel_id: str) -> HotelDetails:
    data = dict(raw)
    star_rating = None
    for key in ("starRating", "star_rating", "stars"):
        value = data.pop(key, None)
        if star_rating is None:
            star_rating = _as_float(value)

    address = data.get("address")
    if isinstance(address, str):
        address = {"line1": address}
    elif not isinstance(address, dict):
        address = None

    for key in ("description", "hotelDescription"):
        if not isinstance(data.get(key), str):
            data.pop(key, None)

    data.update(
        id=str(raw.get("id") or hotel_id),
        name=str(raw.get("name") or "Unnamed Hotel"),
        images=_as_dict_list(raw.get("images"), "url"),
        facilities=_as_dict_list(raw.get("facilities"), "name"),
        rooms=[room for room in raw.get("rooms") or [] if isinstance(room, dict)],
        address=address,
        star_rating=star_rating,
        latitude=_as_float(raw.get("latitude")),
        longitude=_as_float(raw.get("longitude")),
    )
    return HotelDetails.model_validate(data)


def unavailable_hotel_details(hotel_id: str) -> HotelDetails:
    return HotelDetails(
        id=hotel_id,
        name="Hotel Details Unavailable",
        description="Unable to load detailed hotel information at this time.",
        amenities=[],
    )


class HotelLookup:
    def __init__(self, client: LiteApiClient) -> None:
        self.client = client

    def search_hotels(
        self,
        destination_id: str,
        checkin: Optional[str] = None,
        checkout: Optional[str] = None,
        guests: int = 2,
    ) -> HotelSearchResult:
        try:
            raw_hotels = self.client.fetch_city_hotels(destination_id)
            hotels = [normalize_hotel(raw, index, destination_id) for index, raw in enumerate(raw_hotels)]
        except (RuntimeError, ValueError) as exc:
            logger.error("Hotel search failed for '%s', serving static hotels: %s", destination_id, exc)
            return HotelSearchResult(hotels=static_hotels_for(destination_id), source=SOURCE_MOCK_FALLBACK)

        if not hotels:
            logger.warning("LiteAPI returned no hotels for '%s', serving static hotels", destination_id)
            return HotelSearchResult(hotels=static_hotels_for(destination_id), source=SOURCE_MOCK)

        pricing = PRICING_BASE
        if checkin and checkout:
            try:
                rates = self.client.fetch_rates([hotel.id for hotel in hotels], checkin, checkout, guests)
            except LiteApiError as exc:
                logger.warning("Rate lookup failed for '%s', keeping estimated prices: %s", destination_id, exc)
            else:
                hotels = [
                    hotel.model_copy(update={"price_per_night": rates[hotel.id]}) if hotel.id in rates else hotel
                    for hotel in hotels
                ]
                pricing = PRICING_LIVE

        logger.info("Found %d live hotels for '%s'", len(hotels), destination_id)
        return HotelSearchResult(hotels=hotels, source=SOURCE_LIVE, pricing=pricing)

    def find_hotel(self, destination_id: str, hotel_id: str) -> Optional[Hotel]:
        result = self.search_hotels(destination_id)
        candidates = result.hotels if result.source == SOURCE_LIVE else []
        for hotel in candidates + static_hotels_for(destination_id):
            if hotel.id == hotel_id:
                return hotel
        return None

    def get_hotel_details(self, hotel_id: str) -> HotelDetailsResult:
        try:
            raw = self.client.fetch_hotel_details(hotel_id)
            details = normalize_hotel_details(raw, hotel_id)
        except (RuntimeError, ValueError) as exc:
            logger.error("Hotel details lookup failed for '%s': %s", hotel_id, exc)
            return HotelDetailsResult(details=unavailable_hotel_details(hotel_id), source=SOURCE_DETAILS_FALLBACK)
        return HotelDetailsResult(details=details, source=SOURCE_LIVE)
