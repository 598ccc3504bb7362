"""
Team and affiliation routes
"""

from flask import Blueprint, jsonify, request
from assetverse.buisness.affiliations.affiliation_registry import AffiliationRegistry
from assetverse.services.affiliations.affiliation_service import AffiliationService

affiliations_bp = Blueprint('affiliations', __name__)


@affiliations_bp.get('/my-team/<email>')
def my_team(email):
    """Colleagues of an employee in the company given by ?hrEmail="""
    members = AffiliationService.list_team(email, request.args.get('hrEmail'))
    return jsonify([m.to_dict() for m in members])


@affiliations_bp.get('/my-companies/<email>')
def my_companies(email):
    companies = AffiliationService.list_companies(email)
    return jsonify([c.to_dict() for c in companies])


@affiliations_bp.get('/my-employees/<email>')
def my_employees(email):
    employees = AffiliationService.list_employees(email)
    return jsonify([e.to_dict() for e in employees])


@affiliations_bp.delete('/remove-employee/<int:affiliation_id>')
def remove_employee(affiliation_id):
    """HR removes an employee from the team; assigned assets stay assigned"""
    deleted = AffiliationRegistry().remove_affiliation(affiliation_id)
    return jsonify({'deletedCount': deleted})
