"""API v1: routers, endpoints and dependencies."""
