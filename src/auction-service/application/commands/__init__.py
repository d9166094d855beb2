"""Command handlers for the Auction Service."""

from application.commands.auction.create_auction_command import CreateAuctionCommand, CreateAuctionCommandHandler
from application.commands.auction.delete_auction_command import DeleteAuctionCommand, DeleteAuctionCommandHandler
from application.commands.auction.update_auction_command import UpdateAuctionCommand, UpdateAuctionCommandHandler
from application.commands.command_handler_base import CommandHandlerBase

__all__ = [
    "CommandHandlerBase",
    "CreateAuctionCommand",
    "CreateAuctionCommandHandler",
    "UpdateAuctionCommand",
    "UpdateAuctionCommandHandler",
    "DeleteAuctionCommand",
    "DeleteAuctionCommandHandler",
]
