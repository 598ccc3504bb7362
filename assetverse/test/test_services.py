"""
Tests for list, search and dashboard queries
"""

from assetverse.buisness.affiliations.affiliation_registry import AffiliationRegistry
from assetverse.buisness.requests.approval_orchestrator import ApprovalOrchestrator
from assetverse.data.core.asset_info.asset import Asset
from assetverse.services.affiliations.affiliation_service import AffiliationService
from assetverse.services.assets.asset_service import AssetService
from assetverse.services.requests.request_service import AssetRequestService
from conftest import HR_EMAIL, EMPLOYEE_EMAIL


def test_hr_request_search_matches_requester(make_asset, make_request):
    asset = make_asset(quantity=5)
    make_request(asset)
    make_request(asset, requester_email='lee@acme.example', requester_name='Lee Park')

    assert len(AssetRequestService.list_for_hr(HR_EMAIL)) == 2
    found = AssetRequestService.list_for_hr(HR_EMAIL, search='lee')
    assert [r.requester_email for r in found] == ['lee@acme.example']
    assert AssetRequestService.list_for_hr('other@hr.example') == []


def test_employee_request_search_matches_asset_name(make_asset, make_request):
    make_request(make_asset(name='Laptop'))
    make_request(make_asset(name='Headset'))

    found = AssetRequestService.list_for_employee(EMPLOYEE_EMAIL, search='head')
    assert [r.asset_name for r in found] == ['Headset']


def test_request_status_filter(make_asset, make_request):
    asset = make_asset(quantity=3)
    approved = make_request(asset)
    make_request(asset)
    ApprovalOrchestrator().decide(approved.id, 'approved')

    pending = AssetRequestService.list_for_hr(HR_EMAIL, status='pending')
    assert len(pending) == 1
    assert pending[0].id != approved.id


def test_asset_list_hides_empty_stock_from_employees(make_asset):
    make_asset(quantity=0, name='Projector')
    make_asset(quantity=2, name='Laptop')

    browse = AssetService.get_list_data()
    assert [a.product_name for a in browse.items] == ['Laptop']

    own = AssetService.get_list_data(hr_email=HR_EMAIL)
    assert own.total == 2


def test_asset_list_search_and_type(make_asset):
    make_asset(name='Laptop')
    make_asset(name='Sticky notes', product_type=Asset.NON_RETURNABLE)

    assert AssetService.get_list_data(hr_email=HR_EMAIL, search='lap').total == 1
    result = AssetService.get_list_data(hr_email=HR_EMAIL, product_type=Asset.NON_RETURNABLE)
    assert [a.product_name for a in result.items] == ['Sticky notes']


def test_admin_stats(make_asset, make_request):
    laptop = make_asset(name='Laptop', quantity=5)
    pens = make_asset(name='Pens', quantity=5, product_type=Asset.NON_RETURNABLE)
    make_asset(name='Mouse', quantity=5)
    for _ in range(3):
        make_request(laptop)
    make_request(pens)

    stats = AssetService.get_stats(HR_EMAIL)

    assert stats['pieChartData'] == [
        {'name': 'Returnable', 'value': 2},
        {'name': 'Non-returnable', 'value': 1},
    ]
    assert stats['topRequests'] == [{'_id': 'Laptop', 'count': 3}, {'_id': 'Pens', 'count': 1}]


def test_team_lists(make_asset, make_request):
    asset = make_asset(quantity=5)
    orchestrator = ApprovalOrchestrator()
    orchestrator.decide(make_request(asset).id, 'approved')
    orchestrator.decide(make_request(asset, requester_email='lee@acme.example').id, 'approved')

    assert len(AffiliationService.list_employees(HR_EMAIL)) == 2
    assert [a.hr_email for a in AffiliationService.list_companies(EMPLOYEE_EMAIL)] == [HR_EMAIL]
    assert len(AffiliationService.list_team(EMPLOYEE_EMAIL, HR_EMAIL)) == 2
    assert AffiliationService.list_team(EMPLOYEE_EMAIL, None) == []
    assert AffiliationService.list_team('outsider@x.example', HR_EMAIL) == []


def test_team_shrinks_after_removal(make_asset, make_request):
    asset = make_asset(quantity=5)
    ApprovalOrchestrator().decide(make_request(asset).id, 'approved')
    affiliation = AffiliationService.list_employees(HR_EMAIL)[0]

    AffiliationRegistry().remove_affiliation(affiliation.id)

    assert AffiliationService.list_employees(HR_EMAIL) == []
    assert AffiliationService.list_team(EMPLOYEE_EMAIL, HR_EMAIL) == []
