"""Filter vulnerability advisories and find how they reach code through import and call graphs."""

__version__ = "0.1.0"
__all__ = ["advisories", "model", "vulns", "witness"]