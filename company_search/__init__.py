"""
Company search service: business register listing API and search client
"""

__version__ = "1.0.0"
