"""Pydantic models for pairing relations and the longest-pair result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from employee_pairs.core.reporting import Condition

RESULT_COLUMNS = ("Employee ID #1", "Employee ID #2", "Project ID", "Days worked")


class PartnerRelation(BaseModel):
    """Shared overlapping projects of one employee with one partner.

    ``project_ids`` and ``overlap_days`` are index-aligned; a project found
    again for the same partner is appended, never merged.
    """

    partner_id: int
    project_ids: list[int] = []
    overlap_days: list[int] = []

    def add_project(self, project_id: int, days: int) -> None:
        self.project_ids.append(project_id)
        self.overlap_days.append(days)

    @property
    def total_days(self) -> int:
        return sum(self.overlap_days)

    @property
    def projects_label(self) -> str:
        # Each id keeps its trailing space, e.g. "69 55 ".
        return "".join(f"{project_id} " for project_id in self.project_ids)


class PairRecord(BaseModel):
    """Every partner an employee shared an overlapping project with.

    ``partners`` keeps discovery order for the selector; lookups by partner
    id go through a private index so each discovery costs O(1).
    """

    employee_id: int
    partners: list[PartnerRelation] = []

    _by_partner: dict[int, PartnerRelation] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._by_partner = {p.partner_id: p for p in self.partners}

    def find_partner(self, partner_id: int) -> PartnerRelation | None:
        return self._by_partner.get(partner_id)

    def add(self, partner_id: int, project_id: int, days: int) -> PartnerRelation:
        relation = self._by_partner.get(partner_id)
        if relation is None:
            relation = self._by_partner[partner_id] = PartnerRelation(partner_id=partner_id)
            self.partners.append(relation)
        relation.add_project(project_id, days)
        return relation


class MatchResult(BaseModel):
    """The pair of employees with the longest common working period."""

    employee1_id: int
    employee2_id: int
    project_ids: str
    total_days: int = Field(..., ge=0)

    def as_row(self) -> tuple[str, str, str, str]:
        return (
            str(self.employee1_id),
            str(self.employee2_id),
            self.project_ids,
            str(self.total_days),
        )


class PairingAnalysis(BaseModel):
    """Outcome of one run over one input source."""

    employee_count: int = 0
    relation_count: int = 0
    result: MatchResult | None = None
    conditions: list[Condition] = []


class PairTextRequest(BaseModel):
    """Request body for pasted employee records."""

    text: str = Field(..., max_length=1_000_000)


class PairAnalysisResponse(BaseModel):
    """Response of the pair endpoints, ready for a result table."""

    result: MatchResult | None = None
    row: list[str] | None = None
    columns: list[str] = list(RESULT_COLUMNS)
    employee_count: int
    relation_count: int
    conditions: list[Condition]
