from __future__ import annotations

import json
from http.client import HTTPException
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .catalog_data import SKI_DESTINATION_CITY_NAMES, SKI_DESTINATION_COUNTRY_CODES, SKI_DESTINATIONS_META
from .config import DEFAULT_LITEAPI_BASE_URL, PLACEHOLDER_LITEAPI_KEY
from .logger import logger
from .schemas import Destination


class LiteApiError(RuntimeError):
    pass


class LiteApiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_LITEAPI_BASE_URL,
        timeout_seconds: float = 8.0,
        hotels_per_city: int = 6,
        currency: str = "USD",
        guest_nationality: str = "US",
    ) -> None:
        if api_key == PLACEHOLDER_LITEAPI_KEY:
            logger.warning("LITEAPI_PRIVATE_KEY is not set; using placeholder key '%s'", PLACEHOLDER_LITEAPI_KEY)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.hotels_per_city = hotels_per_city
        self.currency = currency
        self.guest_nationality = guest_nationality

    def fetch_destinations(self) -> List[Destination]:
        """Configured destinations that LiteAPI currently lists hotels for."""
        destinations: List[Destination] = []
        for destination_id, meta in SKI_DESTINATIONS_META.items():
            hotels = self.fetch_city_hotels(destination_id, limit=1)
            if not hotels:
                logger.info("LiteAPI lists no hotels for destination '%s'", destination_id)
                continue
            destinations.append(Destination(id=destination_id, **meta))
        return destinations

    def fetch_city_hotels(self, destination_id: str, limit: Optional[int] = None) -> List[dict]:
        city_name = SKI_DESTINATION_CITY_NAMES.get(destination_id, destination_id)
        params = {
            "countryCode": SKI_DESTINATION_COUNTRY_CODES.get(destination_id, "US"),
            "cityName": city_name,
            "limit": limit or self.hotels_per_city,
        }
        payload = self._request("/data/hotels", params=params)
        hotels = payload.get("data")
        if hotels is None:
            return []
        if not isinstance(hotels, list):
            raise LiteApiError(f"Unexpected hotel list payload for city '{city_name}'")
        return [hotel for hotel in hotels if isinstance(hotel, dict)]

    def fetch_rates(self, hotel_ids: List[str], checkin: str, checkout: str, guests: int) -> Dict[str, float]:
        """Lowest total rate per hotel id for the given stay."""
        if not hotel_ids:
            return {}
        body = {
            "hotelIds": hotel_ids,
            "checkin": checkin,
            "checkout": checkout,
            "currency": self.currency,
            "guestNationality": self.guest_nationality,
            "occupancies": [{"adults": guests, "children": []}],
        }
        payload = self._request("/hotels/rates", body=body)
        items = payload.get("data") or []
        if not isinstance(items, list):
            raise LiteApiError("Unexpected rates payload")

        rates: Dict[str, float] = {}
        for item in items:
            if not isinstance(item, dict):
                continue
            hotel_id = str(item.get("hotelId") or item.get("id") or "")
            amount = self._lowest_amount(item)
            if hotel_id and amount is not None:
                rates[hotel_id] = amount
        return rates

    def fetch_hotel_details(self, hotel_id: str) -> dict:
        payload = self._request("/data/hotel", params={"hotelId": hotel_id})
        details = payload.get("data")
        if not isinstance(details, dict):
            raise LiteApiError(f"No hotel details returned for '{hotel_id}'")
        return details

    def _request(self, path: str, params: Optional[dict] = None, body: Optional[dict] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        headers = {"Accept": "application/json", "X-API-Key": self.api_key}
        data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body).encode("utf-8")

        request = Request(url, data=data, headers=headers, method="POST" if body is not None else "GET")
        logger.debug("LiteAPI request %s %s", request.get_method(), path)
        try:
            with urlopen(request, timeout=self.timeout_seconds) as response:
                raw = response.read().decode("utf-8")
        except HTTPError as exc:
            raise LiteApiError(f"LiteAPI request to '{path}' failed with status {exc.code}") from exc
        except (OSError, HTTPException) as exc:
            raise LiteApiError(f"LiteAPI request to '{path}' failed") from exc

        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise LiteApiError(f"LiteAPI returned invalid JSON for '{path}'") from exc
        if not isinstance(payload, dict):
            raise LiteApiError(f"LiteAPI returned an unexpected payload for '{path}'")
        return payload

    @staticmethod
    def _lowest_amount(item: dict) -> Optional[float]:
        amounts: List[float] = []
        rates = item.get("rates")
        room_types = item.get("roomTypes")
        for rate in rates if isinstance(rates, list) else []:
            value = rate.get("total_amount") if isinstance(rate, dict) else None
            if isinstance(value, (int, float)):
                amounts.append(float(value))
        for room_type in room_types if isinstance(room_types, list) else []:
            if not isinstance(room_type, dict):
                continue
            offer = room_type.get("offerRetailRate")
            value = offer.get("amount") if isinstance(offer, dict) else None
            if isinstance(value, (int, float)):
                amounts.append(float(value))
        return min(amounts) if amounts else None
