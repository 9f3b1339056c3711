"""CLI and SDK for the OpenStack Compute v2 API."""

__version__ = "0.1.0"
