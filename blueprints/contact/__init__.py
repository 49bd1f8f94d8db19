"""
Contact Blueprint - Public contact form API
Handles: Submitting messages, reading them back and updating their status
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')

from . import routes
