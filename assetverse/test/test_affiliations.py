"""
Tests for team membership and HR seat counts
"""

import pytest

from assetverse.buisness.affiliations.affiliation_registry import AffiliationRegistry
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.requests.approval_orchestrator import ApprovalOrchestrator
from assetverse.buisness.requests.errors import NotFoundError, SeatLimitExceededError
from assetverse.data.affiliations.employee_affiliation import EmployeeAffiliation
from assetverse.data.core.user_info.user import User
from assetverse.data.requests.assignment import Assignment
from conftest import HR_EMAIL, EMPLOYEE_EMAIL, fresh


def affiliation_record(employee_email=EMPLOYEE_EMAIL):
    return {
        'employee_email': employee_email,
        'employee_name': 'Sam Okafor',
        'hr_email': HR_EMAIL,
        'company_name': 'Acme Logistics',
    }


def test_insert_if_absent_creates_once(hr_user):
    registry = AffiliationRegistry()

    first, created = registry.insert_if_absent(affiliation_record())
    second, created_again = registry.insert_if_absent(affiliation_record())

    assert created is True
    assert created_again is False
    assert first.id == second.id
    assert EmployeeAffiliation.query.count() == 1


def test_remove_affiliation_frees_seat_and_keeps_assignments(make_asset, make_request):
    request = make_request(make_asset(quantity=2))
    ApprovalOrchestrator().decide(request.id, 'approved')
    affiliation = EmployeeAffiliation.query.one()

    deleted = AffiliationRegistry().remove_affiliation(affiliation.id)

    assert deleted == 1
    assert EmployeeAffiliation.query.count() == 0
    assert User.query.filter_by(email=HR_EMAIL).one().current_employees == 0
    assert Assignment.query.one().status == 'assigned', "Removal leaves assigned assets in place"


def test_rejoining_after_removal_takes_a_seat_again(make_asset, make_request):
    asset = make_asset(quantity=3)
    orchestrator = ApprovalOrchestrator()
    orchestrator.decide(make_request(asset).id, 'approved')
    AffiliationRegistry().remove_affiliation(EmployeeAffiliation.query.one().id)

    outcome = orchestrator.decide(make_request(asset).id, 'approved')

    assert outcome.affiliation_created is True
    assert User.query.filter_by(email=HR_EMAIL).one().current_employees == 1


def test_remove_unknown_affiliation(app):
    with pytest.raises(NotFoundError):
        AffiliationRegistry().remove_affiliation(77)


def test_seat_count_never_goes_negative(hr_user):
    registry = AffiliationRegistry()
    affiliation, _ = registry.insert_if_absent(affiliation_record())
    # Inserted directly, so no seat was taken
    from assetverse import db
    db.session.commit()

    assert registry.remove_affiliation(affiliation.id) == 1
    assert fresh(User, hr_user.id).current_employees == 0


def test_increment_seat_count_respects_limit(hr_user):
    from assetverse import db
    directory = Directory()
    hr_user.package_limit = 2
    db.session.commit()

    directory.increment_seat_count(HR_EMAIL, 1)
    directory.increment_seat_count(HR_EMAIL, 1)
    with pytest.raises(SeatLimitExceededError):
        directory.increment_seat_count(HR_EMAIL, 1)
    db.session.commit()

    assert fresh(User, hr_user.id).current_employees == 2


def test_increment_seat_count_unknown_hr(app):
    with pytest.raises(NotFoundError):
        Directory().increment_seat_count('ghost@nowhere.example', 1)


def test_remove_affiliation_already_deleted_frees_no_seat(make_asset, make_request, monkeypatch):
    ApprovalOrchestrator().decide(make_request(make_asset(quantity=2)).id, 'approved')
    affiliation = EmployeeAffiliation.query.one()
    stale = EmployeeAffiliation(id=affiliation.id, hr_email=HR_EMAIL, employee_email=EMPLOYEE_EMAIL)
    registry = AffiliationRegistry()
    registry.remove_affiliation(affiliation.id)
    hr_id = User.query.filter_by(email=HR_EMAIL).one().id
    # A concurrent remover read the row before it was deleted
    monkeypatch.setattr(registry, 'find_by_id', lambda affiliation_id: stale)

    with pytest.raises(NotFoundError):
        registry.remove_affiliation(affiliation.id)

    assert fresh(User, hr_id).current_employees == 0, "Seat must only be freed once"


def test_remove_affiliation_with_unknown_hr_rolls_back(app):
    from assetverse import db
    registry = AffiliationRegistry()
    record = dict(affiliation_record(), hr_email='ghost@nowhere.example')
    affiliation, _ = registry.insert_if_absent(record)
    db.session.commit()

    with pytest.raises(NotFoundError):
        registry.remove_affiliation(affiliation.id)

    assert fresh(EmployeeAffiliation, affiliation.id) is not None, "Delete must be rolled back"
