"""payline - maps shop orders to Ledyer order lines and submits them."""

__version__ = "0.1.0"
