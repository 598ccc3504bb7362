"""
Directory routes: registration, profiles and package payments
"""

from flask import Blueprint, jsonify
from assetverse.presentation.routes import json_body
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.directory.payment_ledger import PaymentLedger
from assetverse.buisness.requests.errors import NotFoundError

users_bp = Blueprint('users', __name__)


@users_bp.post('/users')
def register_user():
    user, created = Directory().register_user(json_body())
    if not created:
        return jsonify({'message': 'user already exists', 'insertedId': None})
    return jsonify({'insertedId': user.id, 'user': user.to_dict()}), 201


@users_bp.get('/users/role/<email>')
def user_role(email):
    return jsonify({'role': Directory().get_role(email)})


@users_bp.get('/users/<email>')
def user_profile(email):
    user = Directory().find_user_by_email(email)
    if user is None:
        raise NotFoundError('User', email)
    profile = user.to_dict()
    if user.is_hr:
        profile['availableSeats'] = user.available_seats
    return jsonify(profile)


@users_bp.post('/payments')
def record_payment():
    payment = PaymentLedger().record_payment(json_body())
    return jsonify({'insertedId': payment.id, 'packageLimit': payment.new_package_limit}), 201
