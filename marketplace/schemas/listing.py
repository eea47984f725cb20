"""Listing schemas."""

from pydantic import BaseModel, ConfigDict


class ListingResponse(BaseModel):
    """Listing response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    location: str
    price: float
    owner_id: int
    image: str | None


class ListingPageResponse(BaseModel):
    """One page of a filtered listing search."""

    total_results: int
    total_pages: int
    current_page: int
    limit: int
    listings: list[ListingResponse]


class ListingCreateResponse(BaseModel):
    id: int
    image: str | None


class ListingDeleteResponse(BaseModel):
    message: str = "Listing deleted successfully"
