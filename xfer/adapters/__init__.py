"""
Adapters for configuration and reporting
"""
