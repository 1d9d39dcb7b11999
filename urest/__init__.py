"""Ordered key/value maps, URL routing, request and response objects, cookies and an HTTP client."""

__version__ = "0.1.0"