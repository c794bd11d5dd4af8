"""server package: the JSON API service.
"""

__all__ = [
    "api",
    "config",
    "logger",
    "mock_data",
    "stats",
    "utils",
]
