"""Query handlers for the Auction Service."""

from application.queries.auction.get_auction_query import GetAuctionQuery, GetAuctionQueryHandler
from application.queries.auction.get_auctions_query import GetAuctionsQuery, GetAuctionsQueryHandler

__all__ = [
    "GetAuctionQuery",
    "GetAuctionQueryHandler",
    "GetAuctionsQuery",
    "GetAuctionsQueryHandler",
]
