"""Hookcord Server - webhook endpoint, dispatch and rate limiting."""
