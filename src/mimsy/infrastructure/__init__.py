"""Infrastructure layer - External dependencies and implementations.

This layer contains everything that touches the outside world:
- The async HTTP client for the content API (httpx)
- Project discovery on disk and loading of collection modules
"""
