"""
Admin Blueprint - Contact triage API behind the shared admin key
Handles: Filtered listing, statistics, status changes and deletion
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

from . import routes
