"""
Affiliation Service
Presentation service for team and employee lists.
"""

from typing import List, Optional
from assetverse.data.affiliations.employee_affiliation import EmployeeAffiliation


class AffiliationService:

    @staticmethod
    def list_employees(hr_email: str) -> List[EmployeeAffiliation]:
        """Employees affiliated with an HR account"""
        return (
            EmployeeAffiliation.query
            .filter_by(hr_email=hr_email)
            .order_by(EmployeeAffiliation.affiliation_date)
            .all()
        )

    @staticmethod
    def list_companies(employee_email: str) -> List[EmployeeAffiliation]:
        """Companies an employee is affiliated with"""
        return EmployeeAffiliation.query.filter_by(employee_email=employee_email).all()

    @staticmethod
    def list_team(employee_email: str, hr_email: Optional[str]) -> List[EmployeeAffiliation]:
        """
        Colleagues of an employee in one company.

        An employee can belong to several companies, so the company must be
        chosen; without hr_email, or for a company the employee is not part
        of, the team is empty.
        """
        if not hr_email:
            return []
        companies = {a.hr_email for a in AffiliationService.list_companies(employee_email)}
        if hr_email not in companies:
            return []
        return AffiliationService.list_employees(hr_email)
