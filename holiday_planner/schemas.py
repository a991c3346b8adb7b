from datetime import date
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

CabinClass = Literal["economy", "business", "first"]

# Longest itinerary the planner will build, counting both travel days.
MAX_TRIP_DAYS = 60


def _check_trip_span(departure: Optional[date], returning: Optional[date]) -> None:
    if returning is None:
        return
    # a missing departure is planned from today
    start = departure or date.today()
    if returning < start:
        if departure is None:
            raise ValueError("return_date is in the past")
        raise ValueError("return_date must not be before departure_date")
    if (returning - start).days + 1 > MAX_TRIP_DAYS:
        raise ValueError(f"trip must not be longer than {MAX_TRIP_DAYS} days")

# ------- Request models -------
class Passengers(BaseModel):
    model_config = ConfigDict(frozen=True)

    adults: int = Field(2, ge=1)
    children: int = Field(0, ge=0)
    infants: int = Field(0, ge=0)

    @property
    def priced(self) -> int:
        """Travellers that pay for seats, meals and tickets; infants ride free."""
        return self.adults + self.children

    @property
    def headcount(self) -> int:
        return self.adults + self.children + self.infants

class TripDetails(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    departure_city: str = Field(..., min_length=1, validation_alias=AliasChoices("departure_city", "departureCity", "origin"))
    departure_code: Optional[str] = Field(None, validation_alias=AliasChoices("departure_code", "departureCode"))
    destination_city: str = Field(..., min_length=1, validation_alias=AliasChoices("destination_city", "destinationCity", "destination"))
    destination_code: Optional[str] = Field(None, validation_alias=AliasChoices("destination_code", "destinationCode"))
    departure_date: Optional[date] = Field(None, validation_alias=AliasChoices("departure_date", "departureDate"))
    return_date: Optional[date] = Field(None, validation_alias=AliasChoices("return_date", "returnDate"))
    passengers: Passengers = Field(default_factory=Passengers)
    cabin_class: CabinClass = Field("economy", validation_alias=AliasChoices("cabin_class", "flight_class", "flightClass"))
    include_hotel: bool = Field(True, validation_alias=AliasChoices("include_hotel", "includeHotel"))
    include_car_rental: bool = Field(True, validation_alias=AliasChoices("include_car_rental", "includeCarRental"))
    pricing_strategy: Literal["fixed", "distance"] = "fixed"

    @model_validator(mode="after")
    def _return_after_departure(self) -> "TripDetails":
        _check_trip_span(self.departure_date, self.return_date)
        return self

# ------- Enrichment models -------
class Attraction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    category: str = ""
    rating: Optional[float] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

# ------- Response models -------
class ItineraryItem(BaseModel):
    id: str
    title: str
    description: str = ""
    time: str  # HH:MM, local time at the destination
    type: Literal["transport", "meal", "attraction"]
    cost: int = Field(0, ge=0)
    cost_per_person: int = Field(0, ge=0)
    included: bool = True
    image_url: Optional[str] = None
    booking_url: Optional[str] = None
    google_maps_url: Optional[str] = None
    duration: Optional[str] = None
    distance: Optional[str] = None

class DayPlan(BaseModel):
    day: int
    date: date
    label: str
    items: List[ItineraryItem] = Field(default_factory=list)

class Flight(BaseModel):
    id: str
    airline: str
    flight_number: str
    origin: str
    origin_code: str
    destination: str
    destination_code: str
    departure_time: str
    arrival_time: str
    duration: str
    cabin_class: CabinClass
    price_per_person: int = Field(..., ge=0)
    cost: int = Field(..., ge=0)
    included: bool = True

class Hotel(BaseModel):
    id: str
    name: str
    rating: float
    address: str
    distance_from_airport: str
    price_per_night: int = Field(..., ge=0)
    nights: int = Field(..., ge=0)
    total_price: int = Field(..., ge=0)
    amenities: List[str] = Field(default_factory=list)
    included: bool = True

class CarRental(BaseModel):
    id: str
    company: str
    vehicle_type: str
    vehicle_name: str
    pickup_location: str
    dropoff_location: str
    pickup_time: str
    dropoff_time: str
    price_per_day: int = Field(..., ge=0)
    rental_days: int = Field(..., ge=0)
    total_price: int = Field(..., ge=0)
    included: bool = True

class TripPlan(BaseModel):
    outbound_flight: Optional[Flight] = None
    return_flight: Optional[Flight] = None
    hotel: Optional[Hotel] = None
    car_rental: Optional[CarRental] = None
    itinerary: List[DayPlan] = Field(default_factory=list)
    total_cost: int = 0
    currency: str = "EUR"
    trip_days: int = 0
    priced_passengers: int = 0
    headcount: int = 0  # everyone travelling, infants included
    cost_multiplier: float = 1.0

class FlightPriceBand(BaseModel):
    min: int
    max: int
    average: int
    distance_km: Optional[float] = None

class CityProfile(BaseModel):
    city: str
    airport_code: str
    latitude: float
    longitude: float
    cost_multiplier: float

# ------- Operation payloads -------
class TogglePayload(BaseModel):
    plan: TripPlan
    item_id: str

class ExportPayload(BaseModel):
    plan: TripPlan
    trip_id: str
    include_excluded: bool = True

class EmailPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    to: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    subject: str = Field(..., min_length=1)
    html: str = Field(..., min_length=1)

class EmailPlanPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    to: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    plan: TripPlan
    subject: Optional[str] = None

class FlightEstimateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    origin: str
    destination: str
    cabin_class: CabinClass = Field("economy", validation_alias=AliasChoices("cabin_class", "flight_class", "flightClass"))
    departure_date: date
    return_date: Optional[date] = Field(None, validation_alias=AliasChoices("return_date", "returnDate"))
    include_hotel: bool = Field(False, validation_alias=AliasChoices("include_hotel", "includeHotel"))
    include_car_rental: bool = Field(False, validation_alias=AliasChoices("include_car_rental", "includeCarRental"))

    @model_validator(mode="after")
    def _return_after_departure(self) -> "FlightEstimateRequest":
        _check_trip_span(self.departure_date, self.return_date)
        return self
