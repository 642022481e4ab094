"""
fontgen: convert fonts between ttf, woff, woff2, eot and svg with optional subsetting.
"""

__version__ = "0.1.0"
