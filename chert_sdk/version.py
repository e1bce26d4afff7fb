"""
Version of the Chert Python SDK, also sent as the HTTP User-Agent.
"""

# Bump this when publishing
__version__ = "0.1.0"

USER_AGENT = f"chert-sdk-python/{__version__}"

__all__ = ["__version__", "USER_AGENT"]
