from extensions import db
from datetime import datetime, timezone
from sqlalchemy.orm import validates
from utils.errors import ValidationError, InvalidStatus
from utils.validation import (
    ContactStatus, NAME_MAX_LENGTH, SUBJECT_MAX_LENGTH, MESSAGE_MAX_LENGTH,
    NAME_RULE, EMAIL_RULE, SUBJECT_RULE, MESSAGE_RULE,
    field_error, normalize_email, check_length
)


def utcnow():
    """Naive UTC timestamp, the form stored in DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat()


_status_values = ', '.join(f"'{status}'" for status in ContactStatus.values())


class Contact(db.Model):
    __tablename__ = 'contacts'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(SUBJECT_MAX_LENGTH), nullable=False, default='')
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ContactStatus.NEW.value)
    ip_address = db.Column(db.Text)
    user_agent = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.CheckConstraint(f'status IN ({_status_values})', name='ck_contacts_status'),
        db.Index('idx_contacts_created_at', 'created_at'),
        db.Index('idx_contacts_status', 'status'),
    )

    # Write-time constraints: every insert/update passes through these

    @validates('name')
    def validate_name(self, key, value):
        if not isinstance(value, str) or not check_length(value.strip(), 1, NAME_MAX_LENGTH):
            raise ValidationError([field_error(key, NAME_RULE)])
        return value

    @validates('email')
    def validate_email(self, key, value):
        if normalize_email(value) is None:
            raise ValidationError([field_error(key, EMAIL_RULE)])
        return value

    @validates('subject')
    def validate_subject(self, key, value):
        if value is None:
            return ''
        if not isinstance(value, str) or len(value) > SUBJECT_MAX_LENGTH:
            raise ValidationError([field_error(key, SUBJECT_RULE)])
        return value

    @validates('message')
    def validate_message(self, key, value):
        if not isinstance(value, str) or not check_length(value.strip(), 1, MESSAGE_MAX_LENGTH):
            raise ValidationError([field_error(key, MESSAGE_RULE)])
        return value

    @validates('status')
    def validate_status(self, key, value):
        status = ContactStatus.parse(value)
        if status is None:
            raise InvalidStatus()
        return status.value

    def to_summary(self):
        """Fields returned to the visitor after a submission"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'subject': self.subject,
            'message': self.message,
            'status': self.status,
            'createdAt': isoformat(self.created_at)
        }

    def to_dict(self, include_client_info=True):
        data = self.to_summary()
        data['updatedAt'] = isoformat(self.updated_at)
        if include_client_info:
            data['ipAddress'] = self.ip_address
            data['userAgent'] = self.user_agent
        return data

    def __repr__(self):
        return f'<Contact {self.id} {self.status}>'
