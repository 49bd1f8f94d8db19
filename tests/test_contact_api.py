from datetime import timedelta

from app import create_app
from extensions import db
from models import Contact, utcnow


def count_contacts():
    return db.session.query(Contact).count()


class TestSubmitContact:

    def test_creates_one_new_contact(self, client, valid_payload):
        response = client.post('/api/contact', json=valid_payload,
                               headers={'User-Agent': 'Mozilla/5.0 test'})

        assert response.status_code == 201
        body = response.get_json()
        assert body['success'] is True
        assert body['message'] == 'Message sent successfully!'
        data = body['data']
        assert data['status'] == 'new'
        assert data['name'] == 'Jane Doe'
        assert data['subject'] == ''
        assert 'ipAddress' not in data
        assert 'userAgent' not in data

        assert count_contacts() == 1
        stored = db.session.get(Contact, data['id'])
        assert stored.message == 'Hello there, testing.'
        assert stored.user_agent == 'Mozilla/5.0 test'
        assert stored.ip_address == '127.0.0.1'

    def test_normalizes_email_and_trims_fields(self, client):
        response = client.post('/api/contact', json={
            'name': '  Jane Doe  ',
            'email': 'Jane.Doe@Mail.com',
            'subject': '  Hiring  ',
            'message': '  Hello there  '
        })
        data = response.get_json()['data']
        assert data['email'] == 'jane.doe@mail.com'
        assert data['name'] == 'Jane Doe'
        assert data['subject'] == 'Hiring'
        assert data['message'] == 'Hello there'

    def test_ignores_forwarded_header_by_default(self, client, valid_payload):
        response = client.post('/api/contact', json=valid_payload,
                               headers={'X-Forwarded-For': '203.0.113.7, 10.0.0.1'})
        stored = db.session.get(Contact, response.get_json()['data']['id'])
        assert stored.ip_address == '127.0.0.1'

    def test_trusted_proxy_supplies_client_ip(self, valid_payload):
        proxied = create_app('testing', {'TRUSTED_PROXY_COUNT': 1})
        with proxied.app_context():
            response = proxied.test_client().post(
                '/api/contact', json=valid_payload,
                headers={'X-Forwarded-For': '203.0.113.7'},
                environ_base={'REMOTE_ADDR': '10.0.0.1'})
            stored = db.session.get(Contact, response.get_json()['data']['id'])
            assert stored.ip_address == '203.0.113.7'
            db.session.remove()
            db.drop_all()

    def test_accepts_form_encoded_body(self, client, valid_payload):
        response = client.post('/api/contact', data=valid_payload)
        assert response.status_code == 201

    def test_validation_failure_writes_nothing(self, client):
        response = client.post('/api/contact', json={
            'name': '',
            'email': 'bad',
            'message': 'x' * 2001
        })

        assert response.status_code == 400
        body = response.get_json()
        assert body['success'] is False
        assert body['message'] == 'Validation failed'
        assert [e['field'] for e in body['errors']] == ['name', 'email', 'message']
        assert count_contacts() == 0

    def test_missing_body_is_a_validation_failure(self, client):
        response = client.post('/api/contact')
        assert response.status_code == 400
        assert count_contacts() == 0

    def test_malformed_json_is_a_validation_failure(self, client):
        response = client.post('/api/contact', data='{"name":', content_type='application/json')
        assert response.status_code == 400
        assert response.get_json()['success'] is False


class TestReadContacts:

    def test_list_all_newest_first_without_client_info(self, client, make_contact):
        now = utcnow()
        older = make_contact(name='Older', created_at=now - timedelta(days=1))
        newer = make_contact(name='Newer', created_at=now)

        response = client.get('/api/contact')

        assert response.status_code == 200
        data = response.get_json()['data']
        assert [c['id'] for c in data] == [newer.id, older.id]
        assert 'ipAddress' not in data[0]
        assert 'updatedAt' in data[0]

    def test_list_all_empty(self, client):
        assert client.get('/api/contact').get_json()['data'] == []

    def test_get_by_id(self, client, make_contact):
        contact = make_contact()
        response = client.get(f'/api/contact/{contact.id}')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['id'] == contact.id
        assert data['ipAddress'] == '127.0.0.1'

    def test_get_unknown_id(self, client):
        response = client.get('/api/contact/999')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'message': 'Contact not found'}


class TestUpdateContactStatus:

    def test_updates_status(self, client, make_contact):
        contact = make_contact()
        response = client.patch(f'/api/contact/{contact.id}', json={'status': 'read'})
        assert response.status_code == 200
        assert response.get_json()['data']['status'] == 'read'

    def test_invalid_status_leaves_row_unchanged(self, client, make_contact):
        contact = make_contact()
        for bad in ['spam', '', None, 'READ', 3]:
            response = client.patch(f'/api/contact/{contact.id}', json={'status': bad})
            assert response.status_code == 400
            assert 'Invalid status' in response.get_json()['message']
        db.session.refresh(contact)
        assert contact.status == 'new'

    def test_invalid_status_checked_before_lookup(self, client):
        response = client.patch('/api/contact/999', json={'status': 'spam'})
        assert response.status_code == 400

    def test_unknown_id(self, client):
        response = client.patch('/api/contact/999', json={'status': 'read'})
        assert response.status_code == 404
