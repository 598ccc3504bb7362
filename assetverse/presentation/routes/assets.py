"""
Asset inventory routes
"""

from flask import Blueprint, jsonify, request
from assetverse.presentation.routes import json_body
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.services.assets.asset_service import AssetService

assets_bp = Blueprint('assets', __name__)


@assets_bp.post('/assets')
def add_asset():
    asset = Inventory().create_asset(json_body())
    return jsonify({'insertedId': asset.id, 'asset': asset.to_dict()}), 201


@assets_bp.get('/assets')
def list_assets():
    """HR's own assets with ?email=, otherwise everything in stock"""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('limit', 10, type=int)

    pagination = AssetService.get_list_data(
        hr_email=request.args.get('email'),
        search=request.args.get('search'),
        product_type=request.args.get('filter'),
        page=page,
        per_page=per_page
    )
    return jsonify({
        'items': [asset.to_dict() for asset in pagination.items],
        'total': pagination.total,
        'page': pagination.page,
        'pages': pagination.pages,
    })


@assets_bp.get('/assets/<int:asset_id>')
def get_asset(asset_id):
    return jsonify(Inventory().get_asset(asset_id).to_dict())


@assets_bp.patch('/assets/<int:asset_id>')
def update_asset(asset_id):
    """HR edits an asset; owner and creation date are fixed"""
    return jsonify({'modifiedCount': Inventory().update_asset(asset_id, json_body())})


@assets_bp.delete('/assets/<int:asset_id>')
def delete_asset(asset_id):
    return jsonify({'deletedCount': Inventory().delete_asset(asset_id)})


@assets_bp.get('/admin-stats/<email>')
def admin_stats(email):
    return jsonify(AssetService.get_stats(email))
