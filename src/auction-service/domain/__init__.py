"""Domain layer for the Auction Service."""
