"""Time conversion, ordered record chains and 3270 full-screen services."""

__version__ = "0.1.0"
__all__ = ["timeconv", "chainr", "tso", "fss"]