"""
Submissions Module - Contact submission lifecycle and admin queries

Every operation is one unit of work against the database session. Store
errors are rolled back, logged, and re-raised as StoreFailure so routes
never leak raw database exceptions.
"""

from contextlib import contextmanager
from datetime import timedelta
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from extensions import db
from models import Contact, utcnow
from .errors import NotFound, InvalidStatus, StoreFailure
from .pagination import get_offset
from .validation import ContactStatus, validate_submission

LIKE_ESCAPE = '\\'


@contextmanager
def store_operation(failure_message):
    """Roll back and convert database errors raised inside the block"""
    try:
        yield
    except StaleDataError as e:
        # Row vanished between load and flush (concurrent delete)
        db.session.rollback()
        current_app.logger.info(f"{failure_message}: row no longer exists ({str(e)})")
        raise NotFound() from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"{failure_message}: {str(e)}")
        raise StoreFailure(failure_message, detail=str(e)) from e


def parse_status(value):
    status = ContactStatus.parse(value)
    if status is None:
        raise InvalidStatus()
    return status


def create_submission(payload, ip_address=None, user_agent=None):
    """
    Validate a visitor's form payload and store it as a new contact

    Args:
        payload (dict): name, email, subject (optional), message
        ip_address (str, optional): Requester address, stored verbatim
        user_agent (str, optional): Requester User-Agent, stored verbatim

    Returns:
        Contact: The stored row (status 'new')
    """
    cleaned = validate_submission(payload)
    contact = Contact(
        name=cleaned['name'],
        email=cleaned['email'],
        subject=cleaned['subject'],
        message=cleaned['message'],
        status=ContactStatus.NEW.value,
        ip_address=ip_address,
        user_agent=user_agent
    )

    with store_operation('Failed to send message. Please try again.'):
        db.session.add(contact)
        db.session.commit()

    current_app.logger.info(f"Contact saved to DB, contact_id: {contact.id}")
    return contact


def list_all_submissions():
    """All submissions, newest first, without pagination"""
    with store_operation('Failed to fetch contacts'):
        return Contact.query.order_by(Contact.created_at.desc(), Contact.id.desc()).all()


def get_submission(contact_id):
    with store_operation('Failed to fetch contact'):
        contact = db.session.get(Contact, contact_id)
    if contact is None:
        raise NotFound()
    return contact


def update_submission_status(contact_id, new_status):
    """Set a contact's status; the status is checked before the row is looked up"""
    status = parse_status(new_status)

    with store_operation('Failed to update contact status'):
        contact = db.session.get(Contact, contact_id)
        if contact is None:
            raise NotFound()
        contact.status = status.value
        contact.updated_at = utcnow()
        db.session.commit()

    current_app.logger.info(f"Contact {contact_id} status set to {status.value}")
    return contact


def delete_submission(contact_id):
    with store_operation('Failed to delete contact'):
        contact = db.session.get(Contact, contact_id)
        if contact is None:
            raise NotFound()
        db.session.delete(contact)
        db.session.commit()

    current_app.logger.info(f"Contact {contact_id} deleted")


def escape_like(term):
    return (term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
                .replace('%', LIKE_ESCAPE + '%')
                .replace('_', LIKE_ESCAPE + '_'))


def query_submissions(page=1, limit=10, status=None, search=None):
    """
    Filtered, paginated admin listing

    Args:
        page (int): 1-based page number
        limit (int): Rows per page
        status (str, optional): Status to match; None or 'all' means any
        search (str, optional): Case-insensitive substring matched against
            name, email, subject and message

    Returns:
        tuple: (contacts on this page, total matching rows)
    """
    query = Contact.query

    if status and status != 'all':
        query = query.filter(Contact.status == parse_status(status).value)

    term = search.strip() if isinstance(search, str) else ''
    if term:
        pattern = f"%{escape_like(term)}%"
        query = query.filter(db.or_(
            Contact.name.ilike(pattern, escape=LIKE_ESCAPE),
            Contact.email.ilike(pattern, escape=LIKE_ESCAPE),
            Contact.subject.ilike(pattern, escape=LIKE_ESCAPE),
            Contact.message.ilike(pattern, escape=LIKE_ESCAPE)
        ))

    with store_operation('Failed to fetch contacts'):
        total = query.count()
        contacts = (query
                    .order_by(Contact.created_at.desc(), Contact.id.desc())
                    .offset(get_offset(page, limit))
                    .limit(limit)
                    .all())
    return contacts, total


def get_submission_stats(now=None):
    """Live counts: total, today, last 7 days, this month and per status"""
    now = now or utcnow()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)
    start_of_month = start_of_day.replace(day=1)

    with store_operation('Failed to fetch statistics'):
        total = Contact.query.count()
        today = Contact.query.filter(Contact.created_at >= start_of_day).count()
        this_week = Contact.query.filter(Contact.created_at >= week_ago).count()
        this_month = Contact.query.filter(Contact.created_at >= start_of_month).count()
        status_counts = (db.session.query(Contact.status, db.func.count(Contact.id))
                         .group_by(Contact.status)
                         .all())

    return {
        'total': total,
        'today': today,
        'thisWeek': this_week,
        'thisMonth': this_month,
        'byStatus': {status: count for status, count in status_counts}
    }


__all__ = [
    'store_operation',
    'create_submission',
    'list_all_submissions',
    'get_submission',
    'update_submission_status',
    'delete_submission',
    'query_submissions',
    'get_submission_stats'
]
