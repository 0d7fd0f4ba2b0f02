from pydantic import BaseModel, ConfigDict, Field

class Point(BaseModel):
    """A WGS84 position. Wire order is longitude first."""
    model_config = ConfigDict(frozen=True)

    longitude: float = Field(..., description="Longitude")
    latitude: float = Field(..., description="Latitude")

    @classmethod
    def from_lng_lat(cls, longitude: float, latitude: float) -> "Point":
        return cls(longitude=longitude, latitude=latitude)
