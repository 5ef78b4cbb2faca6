"""Pydantic schemas for the campus tour API."""

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.campus_location import (
    CampusLocation,
    Coordinates,
    LocationCategory,
)


class CoordinatesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationCreate(BaseModel):
    """Schema for adding a campus location."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    category: LocationCategory
    image_url: str = Field("", max_length=2048)
    coordinates: CoordinatesSchema | None = None
    features: list[str] = Field(default_factory=list, max_length=20)
    hours: str | None = Field(None, max_length=200)

    def to_entity(self) -> CampusLocation:
        return CampusLocation(
            name=self.name,
            description=self.description,
            category=self.category.value,
            image_url=self.image_url,
            coordinates=(
                Coordinates(lat=self.coordinates.lat, lng=self.coordinates.lng)
                if self.coordinates
                else None
            ),
            features=list(self.features),
            hours=self.hours,
        )


class LocationResponse(BaseModel):
    """Schema for a campus location."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: str
    image_url: str = ""
    coordinates: CoordinatesSchema | None = None
    features: list[str] = Field(default_factory=list)
    hours: str | None = None


class LocationListResponse(BaseModel):
    data: list[LocationResponse]


class LocationDetailResponse(BaseModel):
    data: LocationResponse
