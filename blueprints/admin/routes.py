"""
Admin Routes - Contact triage for the site owner
Every route is gated by admin_key_required before touching the database.
"""

from flask import request, current_app
from utils.decorators import admin_key_required
from utils.pagination import parse_page_params, build_pagination
from utils.responses import success_response
from utils.submissions import (
    query_submissions,
    get_submission_stats,
    update_submission_status,
    delete_submission
)
from . import admin_bp


@admin_bp.route('/contacts', methods=['GET'])
@admin_key_required
def list_contacts():
    """Paginated contact list with optional status filter and search"""
    page, limit = parse_page_params(
        request.args,
        default_limit=current_app.config.get('DEFAULT_PAGE_SIZE', 10),
        max_limit=current_app.config.get('MAX_PAGE_SIZE', 100)
    )
    contacts, total = query_submissions(
        page=page,
        limit=limit,
        status=request.args.get('status'),
        search=request.args.get('search')
    )
    return success_response({
        'contacts': [c.to_dict(include_client_info=False) for c in contacts],
        'pagination': build_pagination(page, limit, total)
    })


@admin_bp.route('/contacts/stats', methods=['GET'])
@admin_key_required
def contact_stats():
    return success_response(get_submission_stats())


@admin_bp.route('/contacts/<int:contact_id>/status', methods=['PATCH'])
@admin_key_required
def update_contact_status(contact_id):
    payload = request.get_json(silent=True)
    status = payload.get('status') if isinstance(payload, dict) else None
    contact = update_submission_status(contact_id, status)
    return success_response(contact.to_dict(), 'Contact status updated successfully')


@admin_bp.route('/contacts/<int:contact_id>', methods=['DELETE'])
@admin_key_required
def delete_contact(contact_id):
    delete_submission(contact_id)
    return success_response(message='Contact deleted successfully')
