"""Listing API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from marketplace.api.dependencies import (
    get_current_claims,
    get_image_store,
    get_listing_repository,
)
from marketplace.exceptions import MarketplaceError, NotFoundError, ValidationError
from marketplace.repositories.listings import (
    ListingFilters,
    ListingRepository,
    ListingSort,
    Pagination,
)
from marketplace.schemas.listing import (
    ListingCreateResponse,
    ListingDeleteResponse,
    ListingPageResponse,
    ListingResponse,
)
from marketplace.services.storage import ALLOWED_IMAGE_TYPES, MAX_IMAGE_BYTES, LocalImageStore
from marketplace.services.tokens import TokenClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("", response_model=ListingPageResponse)
async def search_listings(
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
    location: str | None = Query(default=None, description="Exact location match"),
    min_price: str | None = Query(default=None, description="Inclusive lower price bound"),
    max_price: str | None = Query(default=None, description="Inclusive upper price bound"),
    sort_by: str | None = Query(default=None, description="One of: price, id, title"),
    order: str | None = Query(default=None, description="asc or desc"),
    page: str | None = Query(default=None, description="Page number, starting at 1"),
    limit: str | None = Query(default=None, description="Listings per page"),
):
    """Search listings with filters, sorting and pagination.

    Unknown sort columns fall back to insertion order, unknown directions to
    ascending, and missing or non-positive page/limit values to 1 and 10.
    """
    result = await listings.search(
        ListingFilters.from_query(location, min_price, max_price),
        ListingSort.parse(sort_by, order),
        Pagination.parse(page, limit),
    )
    return ListingPageResponse(
        total_results=result.total_results,
        total_pages=result.total_pages,
        current_page=result.current_page,
        limit=result.limit,
        listings=[ListingResponse.model_validate(listing) for listing in result.items],
    )


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: int,
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Get a specific listing."""
    listing = await listings.get_by_id(listing_id)
    if listing is None:
        raise NotFoundError("Listing not found")
    return listing


@router.post("", response_model=ListingCreateResponse)
async def create_listing(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
    image_store: Annotated[LocalImageStore, Depends(get_image_store)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    price: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="JPEG, PNG or GIF image")] = None,
):
    """Create a listing owned by the authenticated user."""
    image_key = None
    image_url = None
    if image is not None and image.filename:
        if image.content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationError("Only images (JPEG, PNG, GIF) are allowed")

        if image.size is not None and image.size > MAX_IMAGE_BYTES:
            raise ValidationError("File too large. Maximum size is 10MB.")
        # size is unknown for some clients; never read past the cap
        data = await image.read(MAX_IMAGE_BYTES + 1)
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError("File too large. Maximum size is 10MB.")

        image_key = image_store.generate_key(image.filename)
        image_url = await image_store.save(image_key, data)

    try:
        listing_id = await listings.create(
            title=title,
            description=description,
            location=location,
            price=price,
            owner_id=claims.user_id,
            image_url=image_url,
        )
    except MarketplaceError:
        if image_key is not None:
            await image_store.delete(image_key)
        raise

    return ListingCreateResponse(id=listing_id, image=image_url)


@router.delete("/{listing_id}", response_model=ListingDeleteResponse)
async def delete_listing(
    listing_id: int,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    listings: Annotated[ListingRepository, Depends(get_listing_repository)],
):
    """Delete a listing (owner only)."""
    await listings.delete_by_id(listing_id, claims.user_id)
    return ListingDeleteResponse()
