"""
Tests for asset stock operations
"""

import pytest

from assetverse import db
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.buisness.requests.errors import InvalidPayloadError, NotFoundError
from assetverse.data.core.asset_info.asset import Asset
from conftest import HR_EMAIL, fresh


def test_create_asset_defaults(hr_user):
    asset = Inventory().create_asset({'productName': 'Monitor', 'hrEmail': HR_EMAIL, 'productQuantity': '7'})

    assert asset.product_type == Asset.RETURNABLE
    assert asset.product_quantity == 7
    assert asset.date_added is not None


@pytest.mark.parametrize('payload', [
    {'hrEmail': HR_EMAIL, 'productQuantity': 1},
    {'productName': 'Chair', 'productQuantity': 1},
    {'productName': 'Chair', 'hrEmail': HR_EMAIL, 'productType': 'Borrowable'},
    {'productName': 'Chair', 'hrEmail': HR_EMAIL, 'productQuantity': -2},
    {'productName': 'Chair', 'hrEmail': HR_EMAIL, 'productQuantity': 'many'},
])
def test_create_asset_validation(hr_user, payload):
    with pytest.raises(InvalidPayloadError):
        Inventory().create_asset(payload)


def test_decrement_stops_at_zero(make_asset):
    asset = make_asset(quantity=1)
    inventory = Inventory()

    assert inventory.decrement_if_available(asset.id) is True
    assert inventory.decrement_if_available(asset.id) is False
    db.session.commit()

    assert fresh(Asset, asset.id).product_quantity == 0


def test_decrement_unknown_asset(app):
    with pytest.raises(NotFoundError):
        Inventory().decrement_if_available(404)


def test_increment_quantity(make_asset):
    asset = make_asset(quantity=0)
    Inventory().increment_quantity(asset.id, 2)
    db.session.commit()
    assert fresh(Asset, asset.id).product_quantity == 2


def test_increment_requires_positive_delta(make_asset):
    with pytest.raises(ValueError):
        Inventory().increment_quantity(make_asset().id, 0)


def test_increment_unknown_asset(app):
    with pytest.raises(NotFoundError):
        Inventory().increment_quantity(404)


def test_delete_asset(make_asset):
    asset = make_asset()
    assert Inventory().delete_asset(asset.id) == 1
    with pytest.raises(NotFoundError):
        Inventory().get_asset(asset.id)


def test_update_asset_changes_fields(make_asset):
    asset = make_asset(quantity=2)

    changed = Inventory().update_asset(asset.id, {'productName': 'Laptop Pro', 'productQuantity': 5})

    stored = fresh(Asset, asset.id)
    assert changed == 1
    assert stored.product_name == 'Laptop Pro'
    assert stored.product_quantity == 5
    assert stored.hr_email == HR_EMAIL


def test_update_asset_without_changes(make_asset):
    asset = make_asset(quantity=2)

    assert Inventory().update_asset(asset.id, {'productName': 'Laptop', 'productQuantity': 2}) == 0
    assert Inventory().update_asset(asset.id, {'colour': 'grey'}) == 0, "Unknown keys are ignored"


@pytest.mark.parametrize('payload', [
    {'hrEmail': 'someone@else.example'},
    {'id': 99},
    {'dateAdded': '2020-01-01'},
    {'productName': ''},
    {'productType': 'Borrowable'},
    {'productQuantity': -1},
    {'productQuantity': True},
])
def test_update_asset_validation(make_asset, payload):
    asset = make_asset(quantity=2)

    with pytest.raises(InvalidPayloadError):
        Inventory().update_asset(asset.id, payload)

    stored = fresh(Asset, asset.id)
    assert stored.hr_email == HR_EMAIL
    assert stored.product_quantity == 2


def test_update_unknown_asset(app):
    with pytest.raises(NotFoundError):
        Inventory().update_asset(404, {'productName': 'Desk'})
