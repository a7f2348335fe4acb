"""Fuzz tar header fields and detect extractor crashes."""

__version__ = "0.1.0"
__all__ = ["tarheader", "extractor", "fuzzer"]