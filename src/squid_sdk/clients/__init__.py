"""
Client module for the Squid API.

Provides the HTTP client used to fetch SDK metadata and route quotes.
"""

from .http_client import SquidApiClient

__all__ = ["SquidApiClient"]
