"""Price and supply computations, I/O and tools for product-mix auctions with positive and negative bids."""

__version__ = "0.1.0"