"""Application layer for the Auction Service."""
