"""
Configuration Package

Environment-driven settings for the client.
"""
