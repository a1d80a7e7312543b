"""MathBlocks — arithmetic block-strike quiz core."""

__version__ = "1.0.0"
