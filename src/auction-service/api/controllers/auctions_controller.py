"""Auctions controller exposing the auction lifecycle over HTTP."""

import logging
from datetime import datetime

from classy_fastapi import delete, get, post, put
from fastapi import Depends, Query
from neuroglia.mediation.mediator import Mediator
from neuroglia.mvc.controller_base import ControllerBase
from pydantic import BaseModel, Field

from api.dependencies import get_mediator, get_seller
from application.commands import CreateAuctionCommand, DeleteAuctionCommand, UpdateAuctionCommand
from application.queries import GetAuctionQuery, GetAuctionsQuery
from integration.models import AuctionDto

log = logging.getLogger(__name__)


# ============================================================================
# REQUEST MODELS
# ============================================================================


class CreateAuctionRequest(BaseModel):
    """Request to list a vehicle for auction."""

    make: str = Field(..., description="Vehicle manufacturer")
    model: str = Field(..., description="Vehicle model")
    year: int = Field(..., description="Model year")
    color: str | None = Field(default=None, description="Exterior color")
    mileage: int | None = Field(default=None, description="Odometer reading")
    image_url: str | None = Field(default=None, description="Picture of the vehicle")
    reserve_price: int = Field(default=0, description="Minimum accepted price")
    auction_end: datetime | None = Field(default=None, description="Scheduled end of the auction")

    class Config:
        json_schema_extra = {
            "example": {
                "make": "Ford",
                "model": "Mustang",
                "year": 2020,
                "color": "Red",
                "mileage": 15000,
                "reserve_price": 20000,
            }
        }


class UpdateAuctionRequest(BaseModel):
    """Request to change the vehicle of an auction."""

    make: str | None = Field(default=None, description="New make (null to keep current)")
    model: str | None = Field(default=None, description="New model (null to keep current)")
    year: int | None = Field(default=None, description="New year (null to keep current)")
    color: str | None = Field(default=None, description="New color (null to keep current)")
    mileage: int | None = Field(default=None, description="New mileage (null to keep current)")
    image_url: str | None = Field(default=None, description="New image URL (null to keep current)")

    class Config:
        json_schema_extra = {
            "example": {
                "color": "Blue",
                "mileage": 18000,
            }
        }


# ============================================================================
# CONTROLLER
# ============================================================================


class AuctionsController(ControllerBase):
    """Controller for auction operations."""

    @get("/", response_model=list[AuctionDto])
    async def get_auctions(
        self,
        date: datetime | None = Query(None, description="Only auctions updated after this instant (ISO 8601, UTC if no offset)"),
        mediator: Mediator = Depends(get_mediator),
    ):
        """List auctions ordered by make.

        Args:
            date: Optional lower bound (exclusive) on the last update time
            mediator: Query mediator

        Returns:
            List of auction DTOs
        """
        result = await mediator.execute_async(GetAuctionsQuery(since=date))
        return self.process(result)

    @get("/{auction_id}", response_model=AuctionDto)
    async def get_auction(
        self,
        auction_id: str,
        mediator: Mediator = Depends(get_mediator),
    ):
        """Get an auction by ID."""
        result = await mediator.execute_async(GetAuctionQuery(auction_id=auction_id))
        return self.process(result)

    @post("/", status_code=201, response_model=AuctionDto)
    async def create_auction(
        self,
        request: CreateAuctionRequest,
        mediator: Mediator = Depends(get_mediator),
        seller: str = Depends(get_seller),
    ):
        """List a vehicle for auction.

        Args:
            request: Create auction request body
            mediator: Command mediator
            seller: Identity of the caller

        Returns:
            Created auction DTO, with its URL in the Location header
        """
        command = CreateAuctionCommand(
            make=request.make,
            model=request.model,
            year=request.year,
            seller=seller,
            color=request.color,
            mileage=request.mileage,
            image_url=request.image_url,
            reserve_price=request.reserve_price,
            auction_end=request.auction_end,
        )

        result = await mediator.execute_async(command)
        response = self.process(result)
        if result.is_success and result.data is not None:
            response.headers["Location"] = f"/api/auctions/{result.data.id}"
        return response

    @put("/{auction_id}", response_model=AuctionDto)
    async def update_auction(
        self,
        auction_id: str,
        request: UpdateAuctionRequest,
        mediator: Mediator = Depends(get_mediator),
    ):
        """Change the vehicle of an auction.

        Fields left out (or null) keep their current value.
        """
        command = UpdateAuctionCommand(
            auction_id=auction_id,
            make=request.make,
            model=request.model,
            year=request.year,
            color=request.color,
            mileage=request.mileage,
            image_url=request.image_url,
        )

        result = await mediator.execute_async(command)
        return self.process(result)

    @delete("/{auction_id}")
    async def delete_auction(
        self,
        auction_id: str,
        mediator: Mediator = Depends(get_mediator),
    ):
        """Delete an auction."""
        result = await mediator.execute_async(DeleteAuctionCommand(auction_id=auction_id))
        return self.process(result)
