"""Concrete I/O adapters (httpx transport, endpoint resolution, local files)."""
