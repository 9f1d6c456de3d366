"""
Core utilities — domain exceptions shared by the fetcher, calculator and API server.
"""
