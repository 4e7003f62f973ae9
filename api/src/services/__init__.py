"""Business logic services.

This package contains the palette generation service and the color theme
provider adapter it delegates the color science to.
"""
