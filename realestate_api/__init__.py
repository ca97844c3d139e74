"""
Real Estate Listings API.
Users, property listings, favorites and scheduled visits over HTTP/JSON.
"""

__version__ = "1.0.0"
