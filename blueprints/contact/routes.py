"""
Contact Routes - Public contact form API
"""

from flask import request
from utils.errors import RateLimited
from utils.responses import success_response
from utils.security import check_rate_limit, get_client_ip, get_user_agent
from utils.submissions import (
    create_submission,
    list_all_submissions,
    get_submission,
    update_submission_status
)
from . import contact_bp


def get_request_payload():
    """JSON body, or form fields when the form is posted directly"""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


@contact_bp.route('', methods=['POST'], strict_slashes=False)
def submit_contact():
    """Contact form processing - validates and saves to the database"""
    if not check_rate_limit('contact'):
        raise RateLimited()

    contact = create_submission(
        get_request_payload(),
        ip_address=get_client_ip(),
        user_agent=get_user_agent()
    )
    return success_response(contact.to_summary(), 'Message sent successfully!', 201)


@contact_bp.route('', methods=['GET'], strict_slashes=False)
def list_contacts():
    contacts = list_all_submissions()
    return success_response([c.to_dict(include_client_info=False) for c in contacts])


@contact_bp.route('/<int:contact_id>', methods=['GET'])
def get_contact(contact_id):
    return success_response(get_submission(contact_id).to_dict())


@contact_bp.route('/<int:contact_id>', methods=['PATCH'])
def update_contact(contact_id):
    """Update contact status"""
    status = get_request_payload().get('status')
    contact = update_submission_status(contact_id, status)
    return success_response(contact.to_dict(), 'Contact status updated successfully')
