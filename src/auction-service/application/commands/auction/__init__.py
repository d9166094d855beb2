"""Auction command handlers."""

from application.commands.auction.create_auction_command import CreateAuctionCommand, CreateAuctionCommandHandler
from application.commands.auction.delete_auction_command import DeleteAuctionCommand, DeleteAuctionCommandHandler
from application.commands.auction.update_auction_command import UpdateAuctionCommand, UpdateAuctionCommandHandler

__all__ = [
    "CreateAuctionCommand",
    "CreateAuctionCommandHandler",
    "UpdateAuctionCommand",
    "UpdateAuctionCommandHandler",
    "DeleteAuctionCommand",
    "DeleteAuctionCommandHandler",
]
