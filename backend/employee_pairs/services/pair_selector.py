from __future__ import annotations

import logging
from typing import Mapping

from employee_pairs.models.pairing import MatchResult, PairRecord

logger = logging.getLogger(__name__)


class PairSelector:
    def select_longest(self, pairs: Mapping[int, PairRecord]) -> MatchResult | None:
        """Return the relation with the most days worked together.

        Only a strictly greater total replaces the current best, so ties
        keep the relation met first in the mapping's order.
        """
        best: MatchResult | None = None
        best_days = 0

        for record in pairs.values():
            for relation in record.partners:
                days = relation.total_days
                if days > best_days:
                    best_days = days
                    best = MatchResult(
                        employee1_id=record.employee_id,
                        employee2_id=relation.partner_id,
                        project_ids=relation.projects_label,
                        total_days=days,
                    )

        if best is not None:
            logger.info(
                "Longest working pair: %d and %d, %d days on projects %s",
                best.employee1_id,
                best.employee2_id,
                best.total_days,
                best.project_ids.strip(),
            )
        return best


pair_selector = PairSelector()
