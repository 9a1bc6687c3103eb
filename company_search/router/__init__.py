"""
HTTP routers for the company search service
"""
