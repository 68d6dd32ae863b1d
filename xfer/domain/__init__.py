"""
Domain layer
"""
