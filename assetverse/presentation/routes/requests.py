"""
Asset request routes: creation, HR decisions, returns and request lists
"""

from flask import Blueprint, jsonify, request
from assetverse.presentation.routes import json_body
from assetverse.buisness.requests.approval_orchestrator import ApprovalOrchestrator
from assetverse.buisness.requests.return_manager import ReturnManager
from assetverse.buisness.requests.request_ledger import RequestLedger
from assetverse.buisness.requests.errors import InvalidDecisionError
from assetverse.services.requests.request_service import AssetRequestService
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.routes.requests")
requests_bp = Blueprint('requests', __name__)


def _decision_from_body():
    body = json_body()
    decision = body.get('status')
    if not decision:
        raise InvalidDecisionError("Request body must contain 'status'")
    return decision


@requests_bp.post('/request-asset')
def create_request():
    """Employee requests an asset"""
    data = json_body()
    asset_request = RequestLedger().create_request(data)
    return jsonify({'insertedId': asset_request.id, 'request': asset_request.to_dict()}), 201


@requests_bp.post('/requests/<int:request_id>/decision')
def decide(request_id):
    """HR approves or rejects a pending request"""
    outcome = ApprovalOrchestrator().decide(request_id, _decision_from_body())
    return jsonify(outcome.to_dict())


@requests_bp.patch('/requests/<int:request_id>')
def decide_patch(request_id):
    outcome = ApprovalOrchestrator().decide(request_id, _decision_from_body())
    return jsonify(outcome.to_dict())


@requests_bp.patch('/return-asset/<int:assignment_id>')
def return_asset(assignment_id):
    """Employee returns an assigned asset"""
    outcome = ReturnManager().return_asset(assignment_id)
    return jsonify(outcome.to_dict())


@requests_bp.patch('/requests/<int:request_id>/return')
def return_request(request_id):
    outcome = ReturnManager().return_request(request_id)
    return jsonify(outcome.to_dict())


@requests_bp.get('/requests/hr/<email>')
def requests_for_hr(email):
    search = request.args.get('search')
    status = request.args.get('status')
    items = AssetRequestService.list_for_hr(email, search=search, status=status)
    return jsonify([item.to_dict() for item in items])


@requests_bp.get('/requests/my-requests/<email>')
def my_requests(email):
    search = request.args.get('search')
    status = request.args.get('status')
    items = AssetRequestService.list_for_employee(email, search=search, status=status)
    return jsonify([item.to_dict() for item in items])
