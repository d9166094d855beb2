"""Enums for the Auction domain."""

from enum import Enum


class AuctionStatus(str, Enum):
    """Lifecycle status of an auction listing."""

    LIVE = "live"  # Open for bidding
    FINISHED = "finished"  # Ended with a winning bid at or above reserve
    RESERVE_NOT_MET = "reserve_not_met"  # Ended below the reserve price
