from __future__ import annotations

from typing import Dict, List

from .schemas import Destination, Hotel

DEFAULT_HOTEL_IMAGE_URL = "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=800&h=600&fit=crop"

# LiteAPI city names for each destination id.
SKI_DESTINATION_CITY_NAMES: Dict[str, str] = {
    "aspen": "Aspen",
    "whistler": "Whistler",
    "vail": "Vail",
}

SKI_DESTINATION_COUNTRY_CODES: Dict[str, str] = {
    "aspen": "US",
    "whistler": "CA",
    "vail": "US",
}

SKI_DESTINATIONS_META: Dict[str, dict] = {
    "aspen": {
        "name": "Aspen Snowmass",
        "location": "Aspen, Colorado, USA",
        "description": "World-class skiing with luxury amenities and stunning mountain views.",
        "base_price_per_person": 450,
        "image_url": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800&h=600&fit=crop&auto=format",
    },
    "whistler": {
        "name": "Whistler Blackcomb",
        "location": "Whistler, BC, Canada",
        "description": "Iconic Canadian resort with diverse terrain and vibrant village life.",
        "base_price_per_person": 380,
        "image_url": "https://images.unsplash.com/photo-1551524164-687a55dd1126?w=800&h=600&fit=crop&auto=format",
    },
    "vail": {
        "name": "Vail Ski Resort",
        "location": "Vail, Colorado, USA",
        "description": "Expansive terrain with European-style village charm.",
        "base_price_per_person": 420,
        "image_url": "https://images.unsplash.com/photo-1551698618-1dfe5d97d256?w=800&h=600&fit=crop&auto=format",
    },
}

STATIC_DESTINATIONS: List[Destination] = [
    Destination(
        id="aspen",
        name="Aspen Snowmass",
        location="Aspen, Colorado",
        description="World-class skiing with luxury amenities and stunning mountain views.",
        image_url="/images/aspen.jpg",
        base_price_per_person=450,
    ),
    Destination(
        id="whistler",
        name="Whistler Blackcomb",
        location="Whistler, BC",
        description="Iconic Canadian resort with diverse terrain and vibrant village life.",
        image_url="/images/whistler.jpg",
        base_price_per_person=380,
    ),
    Destination(
        id="vail",
        name="Vail Ski Resort",
        location="Vail, Colorado",
        description="Expansive terrain with European-style village charm.",
        image_url="/images/vail.jpg",
        base_price_per_person=420,
    ),
]

STATIC_HOTELS: List[Hotel] = [
    Hotel(
        id="aspen-lodge",
        name="The Aspen Mountain Lodge",
        price_per_night=320,
        rating=4.5,
        amenities=["Ski-in/Ski-out", "Spa", "Restaurant", "Pool"],
        image_url="/images/aspen-lodge.jpg",
        destination_id="aspen",
    ),
    Hotel(
        id="aspen-inn",
        name="Snowmass Inn & Suites",
        price_per_night=180,
        rating=4.0,
        amenities=["Free Breakfast", "Shuttle", "Fitness Center"],
        image_url="/images/aspen-inn.jpg",
        destination_id="aspen",
    ),
    Hotel(
        id="whistler-village",
        name="Whistler Village Hotel",
        price_per_night=280,
        rating=4.3,
        amenities=["Village Location", "Ski Storage", "Restaurant"],
        image_url="/images/whistler-village.jpg",
        destination_id="whistler",
    ),
    Hotel(
        id="whistler-peak",
        name="Peak Mountain Resort",
        price_per_night=220,
        rating=4.1,
        amenities=["Mountain View", "Hot Tub", "Free WiFi"],
        image_url="/images/whistler-peak.jpg",
        destination_id="whistler",
    ),
    Hotel(
        id="vail-cascade",
        name="Vail Cascade Resort",
        price_per_night=350,
        rating=4.6,
        amenities=["Luxury Spa", "Multiple Restaurants", "Ski Concierge"],
        image_url="/images/vail-cascade.jpg",
        destination_id="vail",
    ),
    Hotel(
        id="vail-inn",
        name="Mountain View Inn",
        price_per_night=190,
        rating=3.9,
        amenities=["Budget Friendly", "Continental Breakfast", "Parking"],
        image_url="/images/vail-inn.jpg",
        destination_id="vail",
    ),
]


def static_hotels_for(destination_id: str) -> List[Hotel]:
    return [hotel for hotel in STATIC_HOTELS if hotel.destination_id == destination_id]
