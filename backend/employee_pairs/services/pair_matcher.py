from __future__ import annotations

import logging
from typing import Sequence

from employee_pairs.core.reporting import Condition, ConditionKind, ConditionReporter
from employee_pairs.models.employee import EmployeeProfile
from employee_pairs.models.pairing import PairRecord
from employee_pairs.services.date_utils import overlap_days

logger = logging.getLogger(__name__)

MIN_OVERLAP_DAYS = 1

NO_EMPLOYEES_MESSAGE = "No employees available. Therefore no potential pairs can be formed."
SINGLE_EMPLOYEE_MESSAGE = "Insufficient number of employees. Therefore no potential pairs can be formed."
NO_PAIRS_MESSAGE = "Did not find any pair of employees working on the same project for the given periods."


class PairMatcher:
    """Finds every pair of employees with overlapping periods on a common project.

    Both (i, j) and (j, i) are visited. Discoveries are stored under the
    first employee of each visit, so a pair appears once per direction and
    the map keeps discovery order.
    """

    def _collect_pairs(self, profiles: Sequence[EmployeeProfile]) -> dict[int, PairRecord]:
        pairs: dict[int, PairRecord] = {}

        for first in profiles:
            for second in profiles:
                if first.employee_id == second.employee_id:
                    continue

                for mine in first.assignments:
                    for theirs in second.assignments:
                        if mine.project_id != theirs.project_id:
                            continue

                        days = overlap_days(mine.start_date, mine.end_date, theirs.start_date, theirs.end_date)
                        if days < MIN_OVERLAP_DAYS:
                            continue

                        logger.debug(
                            "Employee pair is: %d, %d, project %d, %d days",
                            first.employee_id,
                            second.employee_id,
                            mine.project_id,
                            days,
                        )
                        record = pairs.get(first.employee_id)
                        if record is None:
                            record = pairs[first.employee_id] = PairRecord(employee_id=first.employee_id)
                        record.add(second.employee_id, mine.project_id, days)

        return pairs

    def match(
        self,
        profiles: Sequence[EmployeeProfile],
        reporter: ConditionReporter | None = None,
    ) -> dict[int, PairRecord]:
        reporter = reporter or ConditionReporter(test_mode=True)

        if len({p.employee_id for p in profiles}) < 2:
            if profiles:
                reporter.report(Condition(kind=ConditionKind.INSUFFICIENT_EMPLOYEES, message=SINGLE_EMPLOYEE_MESSAGE))
            else:
                # Nothing was loaded, so the loader has already told the user why.
                reporter.report(
                    Condition(kind=ConditionKind.INSUFFICIENT_EMPLOYEES, message=NO_EMPLOYEES_MESSAGE, notify=False)
                )
            return {}

        pairs = self._collect_pairs(profiles)

        if not pairs:
            reporter.report(Condition(kind=ConditionKind.NO_QUALIFYING_PAIRS, message=NO_PAIRS_MESSAGE))
            return pairs

        relation_count = sum(len(r.partners) for r in pairs.values())
        logger.info("Found %d employee pair relations for %d employees", relation_count, len(profiles))
        return pairs


pair_matcher = PairMatcher()
