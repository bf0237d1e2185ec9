"""Static catalog data: supported cities, purposes and form option lists."""

from fastapi import HTTPException, status
from typing import List, Optional
from lookin.schemas.catalog import City, Purpose, Amenity, Options


POPULAR_CITIES: List[City] = [
    City(
        id="bangalore",
        name="Bangalore",
        state="Karnataka",
        active_roommates=15420,
        avg_rent=18000,
        popular_areas=["Koramangala", "HSR Layout", "Electronic City", "Whitefield"],
        image="/static/cities/bangalore.png",
    ),
    City(
        id="mumbai",
        name="Mumbai",
        state="Maharashtra",
        active_roommates=22150,
        avg_rent=25000,
        popular_areas=["Andheri", "Bandra", "Powai", "Thane"],
        image="https://images.unsplash.com/photo-1638796323753-e2dcac2e4eb9?w=400&h=240&fit=crop",
    ),
    City(
        id="delhi",
        name="Delhi",
        state="Delhi",
        active_roommates=18750,
        avg_rent=20000,
        popular_areas=["Gurgaon", "Noida", "CP", "Dwarka"],
        image="https://images.unsplash.com/photo-1705861145502-dc882ea96cbe?w=400&h=240&fit=crop",
    ),
    City(
        id="pune",
        name="Pune",
        state="Maharashtra",
        active_roommates=12300,
        avg_rent=15000,
        popular_areas=["Hinjewadi", "Kothrud", "Viman Nagar", "Wakad"],
        image="https://images.unsplash.com/photo-1709483480913-76f18a9ef6f5?w=400&h=240&fit=crop",
    ),
    City(
        id="hyderabad",
        name="Hyderabad",
        state="Telangana",
        active_roommates=9850,
        avg_rent=14000,
        popular_areas=["Gachibowli", "Hitech City", "Kondapur", "Manikonda"],
        image="https://images.unsplash.com/photo-1663745352553-b74529d4a7f9?w=400&h=240&fit=crop",
    ),
    City(
        id="chennai",
        name="Chennai",
        state="Tamil Nadu",
        active_roommates=8920,
        avg_rent=16000,
        popular_areas=["OMR", "T. Nagar", "Velachery", "Anna Nagar"],
        image="https://images.unsplash.com/photo-1717310686662-d1d0ca8427ff?w=400&h=240&fit=crop",
    ),
]

PURPOSES: List[Purpose] = [
    Purpose(
        id="find",
        title="Find a Room or Flatmate",
        description="Browse compatible flatmates and available rooms in your city",
        features=["Verified profiles", "Lifestyle matching", "Direct messaging"],
    ),
    Purpose(
        id="list",
        title="List Your Room",
        description="Post your room and find the right flatmate to share it with",
        features=["Free listings", "Track views and inquiries", "Screen applicants by chat"],
    ),
]

LIFESTYLE_OPTIONS = [
    "Clean", "Quiet", "Social", "Non-smoker", "Pet-friendly", "Gym-goer",
    "Organized", "Early riser", "Night owl", "Vegetarian", "Vegan",
]

INTEREST_OPTIONS = [
    "Cooking", "Reading", "Netflix", "Gaming", "Sports", "Yoga",
    "Travel", "Music", "Art", "Photography", "Dancing", "Hiking",
]

AMENITY_OPTIONS: List[Amenity] = [
    Amenity(id="wifi", label="WiFi"),
    Amenity(id="parking", label="Parking"),
    Amenity(id="gym", label="Gym"),
    Amenity(id="security", label="24/7 Security"),
    Amenity(id="kitchen", label="Kitchen Access"),
    Amenity(id="balcony", label="Balcony"),
    Amenity(id="ac", label="Air Conditioning"),
    Amenity(id="washing-machine", label="Washing Machine"),
    Amenity(id="fridge", label="Refrigerator"),
    Amenity(id="furnished", label="Furnished"),
]

FLATMATE_PREFERENCE_OPTIONS = [
    "Working Professionals Only",
    "Students Welcome",
    "IT Professionals",
    "Female Flatmate Preferred",
    "Male Flatmate Preferred",
    "Vegetarian Only",
    "Non-smoker",
    "No Drinking",
    "Pet Friendly",
    "Social Person",
    "Quiet Person",
    "No Overnight Guests",
]

ROOM_TYPES = ["Single room", "Shared room", "Studio", "1 BHK", "2 BHK", "3 BHK"]

HOUSE_RULE_SUGGESTIONS = [
    "No smoking indoors",
    "No loud music after 10 PM",
    "Keep common areas clean",
    "Guests with prior notice",
    "Split utility bills equally",
]


class CatalogService:
    """Lookups over the static catalog."""

    @staticmethod
    def search_cities(query: Optional[str] = None) -> List[City]:
        """Match the query against city name, state and popular areas."""
        if not query or not query.strip():
            return list(POPULAR_CITIES)

        needle = query.strip().lower()
        return [
            city for city in POPULAR_CITIES
            if needle in city.name.lower()
            or needle in city.state.lower()
            or any(needle in area.lower() for area in city.popular_areas)
        ]

    @staticmethod
    def find_city(city_id: str) -> Optional[City]:
        for city in POPULAR_CITIES:
            if city.id == city_id:
                return city
        return None

    @staticmethod
    def get_city(city_id: str) -> City:
        city = CatalogService.find_city(city_id)
        if not city:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="City not found"
            )
        return city

    @staticmethod
    def get_purposes() -> List[Purpose]:
        return list(PURPOSES)

    @staticmethod
    def get_options() -> Options:
        return Options(
            lifestyle=LIFESTYLE_OPTIONS,
            interests=INTEREST_OPTIONS,
            amenities=AMENITY_OPTIONS,
            flatmate_preferences=FLATMATE_PREFERENCE_OPTIONS,
            room_types=ROOM_TYPES,
            house_rules=HOUSE_RULE_SUGGESTIONS,
        )

    @staticmethod
    def amenity_ids() -> List[str]:
        return [amenity.id for amenity in AMENITY_OPTIONS]
