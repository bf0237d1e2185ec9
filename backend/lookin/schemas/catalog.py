"""Schemas for static catalog data (cities, purposes, option lists)."""

from pydantic import BaseModel
from typing import List


class City(BaseModel):
    id: str
    name: str
    state: str
    active_roommates: int
    avg_rent: int
    popular_areas: List[str]
    image: str


class Purpose(BaseModel):
    id: str
    title: str
    description: str
    features: List[str]


class Amenity(BaseModel):
    id: str
    label: str


class Options(BaseModel):
    lifestyle: List[str]
    interests: List[str]
    amenities: List[Amenity]
    flatmate_preferences: List[str]
    room_types: List[str]
    house_rules: List[str]
