"""
Models: domain dataclasses and API schemas
"""
