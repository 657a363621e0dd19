# tests/conftest.py
"""
Shared fixtures for the Shieldify IP tests
"""
import os
import pytest
from datetime import datetime

# Force environment variables BEFORE importing the app
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing'

from shieldify import create_app, db as _db
from shieldify.constants import ROLE_ADMIN, ROLE_CUSTOMER
from shieldify.models import Account, UserProfile, Report
from shieldify.utils.request_context import RequestContext


@pytest.fixture(scope='function')
def app():
    """Flask application configured for tests"""
    return create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SERVER_NAME': 'localhost',
        'SECRET_KEY': 'test-secret-key-for-testing',
    })


@pytest.fixture(scope='function')
def db(app):
    """Create and drop the schema around every test"""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app, db):
    """HTTP test client"""
    with app.test_client() as client:
        with app.app_context():
            yield client


@pytest.fixture
def app_context(app, db):
    """Application context"""
    with app.app_context():
        yield app


def make_user(db, email, password, full_name, role=ROLE_CUSTOMER):
    account = Account(email=email, full_name=full_name)
    account.set_password(password)
    db.session.add(account)
    db.session.flush()

    profile = UserProfile(id=account.id, email=email, full_name=full_name, role=role)
    db.session.add(profile)
    db.session.commit()
    return profile


@pytest.fixture
def customer(db):
    """Customer profile with a sign-in account"""
    return make_user(db, 'customer@test.com', 'CustomerPass123', 'Test Customer')


@pytest.fixture
def second_customer(db):
    return make_user(db, 'second@test.com', 'SecondPass123', 'Second Customer')


@pytest.fixture
def admin_user(db):
    """Admin profile with a sign-in account"""
    return make_user(db, 'admin@test.com', 'AdminPass123', 'Admin User', role=ROLE_ADMIN)


@pytest.fixture
def customer_context(customer):
    return RequestContext.for_profile(customer)


@pytest.fixture
def second_context(second_customer):
    return RequestContext.for_profile(second_customer)


@pytest.fixture
def admin_context(admin_user):
    return RequestContext.for_profile(admin_user)


def make_report(db, owner, **overrides):
    """Insert a report directly, bypassing submission validation"""
    values = {
        'customer_id': owner.id,
        'platform': 'instagram',
        'report_type': 'copyright',
        'status': 'pending',
        'account_page_name': '@copycat',
        'infringing_urls': ['https://instagram.com/p/abc'],
        'description': None,
        'form_payload': {'work_description': 'My photo', 'proof_links': []},
    }
    values.update(overrides)
    report = Report(**values)
    db.session.add(report)
    db.session.commit()
    return report


@pytest.fixture
def report(db, customer):
    """Pending copyright report owned by the customer"""
    return make_report(db, customer)


@pytest.fixture
def other_report(db, second_customer):
    """Report owned by the second customer"""
    return make_report(
        db, second_customer,
        platform='youtube',
        report_type='other',
        account_page_name='Fake Channel',
        form_payload={'other_details': 'Reuploads my videos'},
        created_at=datetime(2024, 1, 15, 12, 0),
    )


def valid_fields(**overrides):
    """A complete, valid submission for a trademark report"""
    fields = {
        'platform': 'tiktok',
        'account_page_name': '@knockoff',
        'infringing_urls': ['https://www.tiktok.com/@knockoff/video/1'],
        'description': 'Uses our logo',
        'report_type': 'trademark',
        'trademark_name': 'Acme',
    }
    fields.update(overrides)
    return fields


def login(client, email, password):
    """Sign in through the login form"""
    return client.post('/login', data={
        'email': email,
        'password': password,
    }, follow_redirects=True)


def logout(client):
    return client.get('/logout', follow_redirects=True)
