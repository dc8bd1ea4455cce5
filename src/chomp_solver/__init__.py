"""Perfect-play solver and on-chain codec for Chomping Glass."""

__version__ = "0.1.0"
