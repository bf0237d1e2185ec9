from fastapi import APIRouter, Query
from typing import List, Optional
from lookin.schemas import City, Purpose, Options
from lookin.services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])


@router.get("/cities", response_model=List[City])
async def list_cities(q: Optional[str] = Query(None, max_length=100)):
    """
    Popular cities, optionally filtered by name, state or area.
    """
    return CatalogService.search_cities(q)


@router.get("/cities/{city_id}", response_model=City)
async def get_city(city_id: str):
    return CatalogService.get_city(city_id)


@router.get("/purposes", response_model=List[Purpose])
async def list_purposes():
    """The two app flows: find a flatmate or list a room."""
    return CatalogService.get_purposes()


@router.get("/options", response_model=Options)
async def list_options():
    return CatalogService.get_options()
