"""
Extensions Module - Centralized initialization of Flask extensions
Keeps the database handle out of app.py to avoid circular imports
and so tests can bind it to a fresh application.
"""

from flask_sqlalchemy import SQLAlchemy

# Initialize extensions without binding to app
db = SQLAlchemy()

__all__ = ['db']
