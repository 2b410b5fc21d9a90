"""Short link service: random and custom short codes with redirect lookup."""

__version__ = "1.0.0"
