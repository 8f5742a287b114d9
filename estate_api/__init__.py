"""
Estate Listing API.
REST service for real-estate listings and the accounts that own them.
"""

__version__ = "1.0.0"
