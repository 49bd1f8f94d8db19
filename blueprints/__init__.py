"""
Blueprints Package - Modular application structure
Each blueprint handles a specific part of the API
"""

__all__ = ['contact', 'admin']
