"""Employee models built by the record loader."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class ProjectAssignment(BaseModel):
    """One input row: a project and the period the employee worked on it."""

    project_id: int
    start_date: date | None = None
    end_date: date | None = None


class EmployeeProfile(BaseModel):
    """All project assignments of one employee, in input order."""

    employee_id: int
    assignments: list[ProjectAssignment] = []

    def add_assignment(self, project_id: int, start_date: date | None, end_date: date | None) -> ProjectAssignment:
        assignment = ProjectAssignment(project_id=project_id, start_date=start_date, end_date=end_date)
        self.assignments.append(assignment)
        return assignment
