"""
Pytest configuration and fixtures for the AssetVerse workflow tests
"""
import os
import pytest

# Set SECRET_KEY if not set (for testing)
os.environ.setdefault('SECRET_KEY', 'test_secret_key_for_assetverse_testing')

from assetverse import create_app
from assetverse import db as _db
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.buisness.requests.request_ledger import RequestLedger
from assetverse.data.core.asset_info.asset import Asset

HR_EMAIL = 'hr@acme.example'
EMPLOYEE_EMAIL = 'sam@acme.example'


@pytest.fixture(scope='function')
def app():
    """Flask application on a fresh in-memory database"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'APPROVAL_RETRY_BACKOFF': 0,
    })

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def hr_user(app):
    user, _ = Directory().register_user({
        'email': HR_EMAIL,
        'name': 'Hana Ruiz',
        'role': 'hr',
        'companyName': 'Acme Logistics',
        'companyLogo': 'https://assets.acme.example/logo.png',
    })
    return user


@pytest.fixture
def employee(app):
    user, _ = Directory().register_user({
        'email': EMPLOYEE_EMAIL,
        'name': 'Sam Okafor',
        'role': 'employee',
    })
    return user


@pytest.fixture
def make_asset(hr_user):
    """Factory: make_asset(quantity=1, product_type='Returnable', name='Laptop')"""
    def _make(quantity=1, product_type=Asset.RETURNABLE, name='Laptop'):
        return Inventory().create_asset({
            'productName': name,
            'productType': product_type,
            'productQuantity': quantity,
            'hrEmail': hr_user.email,
            'companyName': hr_user.company_name,
        })
    return _make


@pytest.fixture
def make_request(app):
    """Factory: make_request(asset, requester_email=EMPLOYEE_EMAIL)"""
    def _make(asset, requester_email=EMPLOYEE_EMAIL, requester_name='Sam Okafor'):
        return RequestLedger().create_request({
            'requesterEmail': requester_email,
            'requesterName': requester_name,
            'assetId': asset.id,
            'note': 'needed for work',
        })
    return _make


def fresh(model, identifier):
    """Fetch the current database row, bypassing the identity map"""
    return _db.session.get(model, identifier, populate_existing=True)
