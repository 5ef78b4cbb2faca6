"""Campus location directory entities and the built-in demo directory."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

LOCATIONS_COLLECTION = "campusLocations"


class LocationCategory(StrEnum):
    """Location categories shown in the campus tour."""

    ACADEMIC = "academic"
    HOUSING = "housing"
    DINING = "dining"
    RECREATION = "recreation"
    SERVICES = "services"


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float


@dataclass
class CampusLocation:
    """Domain entity for a campus location."""

    name: str
    description: str
    category: str
    image_url: str = ""
    coordinates: Coordinates | None = None
    features: list[str] = field(default_factory=list)
    hours: str | None = None
    id: str = ""

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "CampusLocation":
        coords = data.get("coordinates")
        return cls(
            id=id,
            name=data.get("name", ""),
            description=data.get("description", ""),
            image_url=data.get("imageUrl", ""),
            category=data.get("category", ""),
            coordinates=(
                Coordinates(lat=float(coords["lat"]), lng=float(coords["lng"]))
                if coords
                else None
            ),
            features=list(data.get("features") or []),
            hours=data.get("hours"),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image_url,
            "category": self.category,
            "features": list(self.features),
        }
        if self.coordinates:
            doc["coordinates"] = {"lat": self.coordinates.lat, "lng": self.coordinates.lng}
        if self.hours:
            doc["hours"] = self.hours
        return doc


# Served when the collection is empty or unreadable.
DEMO_LOCATIONS: tuple[CampusLocation, ...] = (
    CampusLocation(
        id="1",
        name="Main Library",
        description=(
            "Our flagship library houses over 2 million books and provides quiet "
            "study spaces, group collaboration rooms, and digital resources."
        ),
        image_url="https://images.unsplash.com/photo-1541339907198-e08756dedf3f",
        category=LocationCategory.ACADEMIC,
        features=["Study Rooms", "Computer Lab", "Quiet Zones", "Coffee Shop"],
        hours="Monday-Friday: 7am-11pm, Weekends: 9am-9pm",
    ),
    CampusLocation(
        id="2",
        name="Science Building",
        description=(
            "Home to the departments of Biology, Chemistry, Physics and Astronomy, "
            "featuring state-of-the-art laboratories and research facilities."
        ),
        image_url="https://images.unsplash.com/photo-1562774053-701939374585",
        category=LocationCategory.ACADEMIC,
        features=["Research Labs", "Lecture Halls", "Observatory", "Computer Labs"],
        hours="Monday-Friday: 6am-10pm, Weekends: 8am-6pm",
    ),
    CampusLocation(
        id="3",
        name="North Residence Hall",
        description=(
            "Modern dormitory featuring suite-style rooms with shared common spaces, "
            "kitchenettes, and laundry facilities on each floor."
        ),
        image_url="https://images.unsplash.com/photo-1555854877-bab0e564b8d5",
        category=LocationCategory.HOUSING,
        features=["Suite-Style Rooms", "Study Lounges", "Laundry", "TV Lounge"],
        hours="24/7 Access for Residents",
    ),
    CampusLocation(
        id="4",
        name="University Center",
        description=(
            "The heart of campus social life, housing dining options, student "
            "organization offices, recreational facilities, and event spaces."
        ),
        image_url="https://images.unsplash.com/photo-1591088398332-8a7791972843",
        category=LocationCategory.SERVICES,
        features=["Food Court", "Ballroom", "Meeting Rooms", "Student Offices"],
        hours="Monday-Sunday: 7am-12am",
    ),
    CampusLocation(
        id="5",
        name="Campus Dining Hall",
        description=(
            "The main dining facility offering a variety of food stations with "
            "options for all dietary needs and preferences."
        ),
        image_url="https://images.unsplash.com/photo-1544965850-6f9a25bdc1a3",
        category=LocationCategory.DINING,
        features=[
            "Vegetarian Options",
            "Allergen-Free Station",
            "Made-to-Order",
            "International Cuisine",
        ],
        hours="Breakfast: 7am-10am, Lunch: 11am-2pm, Dinner: 5pm-8pm",
    ),
    CampusLocation(
        id="6",
        name="Recreation Center",
        description=(
            "Comprehensive fitness facility featuring a swimming pool, basketball "
            "courts, weight room, indoor track, and group exercise studios."
        ),
        image_url="https://images.unsplash.com/photo-1534438327276-14e5300c3a48",
        category=LocationCategory.RECREATION,
        features=[
            "Swimming Pool",
            "Fitness Classes",
            "Weight Room",
            "Basketball Courts",
            "Climbing Wall",
        ],
        hours="Monday-Friday: 6am-11pm, Weekends: 8am-9pm",
    ),
    CampusLocation(
        id="7",
        name="Engineering Complex",
        description=(
            "Cutting-edge facility for engineering education and research, with "
            "specialized labs, maker spaces, and industry collaboration areas."
        ),
        image_url="https://images.unsplash.com/photo-1581092921461-eab10380447b",
        category=LocationCategory.ACADEMIC,
        features=["Robotics Lab", "3D Printing", "Electronics Workshop", "Computer Labs"],
        hours="Monday-Friday: 7am-10pm, Weekends: 9am-6pm",
    ),
    CampusLocation(
        id="8",
        name="Student Health Center",
        description=(
            "Comprehensive healthcare facility providing medical services, "
            "counseling, health education, and wellness programs."
        ),
        image_url="https://images.unsplash.com/photo-1538108149393-fbbd81895907",
        category=LocationCategory.SERVICES,
        features=["Medical Clinic", "Counseling Services", "Pharmacy", "Health Education"],
        hours="Monday-Friday: 8am-5pm, Saturday: 10am-2pm (Urgent Care Only)",
    ),
)
