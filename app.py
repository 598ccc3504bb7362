#!/usr/bin/env python3
"""
Run script for the AssetVerse server
"""

import argparse
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from assetverse import create_app
from assetverse.build import build_database
from assetverse.utils.logger import get_logger

# Run 'python generate_env.py' to create a .env file with a secure SECRET_KEY.

app = create_app()
logger = get_logger("assetverse.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='AssetVerse server')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the server')
    parser.add_argument('--seed-demo-data', action='store_true',
                        help='Insert the demo HR account, employees, assets and requests')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting AssetVerse...")
    build_database(seed_demo_data=args.seed_demo_data, app=app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST: Server host (default: 127.0.0.1 for security)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')

    # FLASK_PORT: Server port (default: 5000)
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=False)
