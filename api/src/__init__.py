"""FastAPI service for Material color palette generation.

This package provides the HTTP endpoints that turn a single base color into
a concatenated hex string of Material light or dark scheme colors and
custom accent variants.
"""

__version__ = "0.1.0"
