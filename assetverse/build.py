#!/usr/bin/env python3
"""
Database build for AssetVerse
Creates the tables and, on request, loads demo data
"""

import json
from pathlib import Path
from assetverse import create_app, db
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.build")

DEMO_DATA_FILE = Path(__file__).parent / 'build_data_demo.json'


def build_models():
    """Create every table registered with SQLAlchemy"""
    db.create_all()
    logger.info("All database tables created")


def insert_demo_data(path=DEMO_DATA_FILE):
    """
    Insert demo users, assets and pending requests through the business layer.

    Users and assets that already exist are left alone, so the build can be
    run repeatedly. Requests reference assets by name.
    """
    from assetverse.buisness.directory.directory import Directory
    from assetverse.buisness.inventory.inventory import Inventory
    from assetverse.buisness.requests.request_ledger import RequestLedger
    from assetverse.data.core.asset_info.asset import Asset

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    directory = Directory()
    for user_data in data.get('users', []):
        directory.register_user(user_data)

    inventory = Inventory()
    for asset_data in data.get('assets', []):
        existing = Asset.query.filter_by(
            hr_email=asset_data['hrEmail'],
            product_name=asset_data['productName'],
        ).first()
        if existing:
            logger.debug(f"Asset '{asset_data['productName']}' already present")
            continue
        inventory.create_asset(asset_data)

    ledger = RequestLedger(inventory)
    for request_data in data.get('requests', []):
        asset = Asset.query.filter_by(product_name=request_data['assetName']).first()
        if asset is None:
            logger.warning(f"Demo request skipped, no asset named '{request_data['assetName']}'")
            continue
        payload = dict(request_data, assetId=asset.id)
        payload.pop('assetName')
        ledger.create_request(payload)

    logger.info(f"Demo data loaded from {path.name}")


def build_database(seed_demo_data=False, app=None):
    """
    Build the AssetVerse database

    Args:
        seed_demo_data (bool): Also insert the demo data set
        app: Flask app to build for (default: a new app from the environment)
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build (demo data: {seed_demo_data})")
        build_models()

        if seed_demo_data:
            try:
                insert_demo_data()
            except Exception as e:
                db.session.rollback()
                logger.error(f"Demo data insertion failed: {e}")
                raise

        logger.info("Database build completed successfully")
