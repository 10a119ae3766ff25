"""Runs the load, match and select steps for one input source."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from employee_pairs.core.reporting import ConditionReporter
from employee_pairs.models.employee import EmployeeProfile
from employee_pairs.models.pairing import PairingAnalysis, PairRecord
from employee_pairs.services.pair_matcher import pair_matcher
from employee_pairs.services.pair_selector import pair_selector
from employee_pairs.services.record_loader import record_loader

logger = logging.getLogger(__name__)


class PairingService:
    def find_all_employee_pairs(
        self,
        source: Iterable[str],
        reporter: ConditionReporter | None = None,
    ) -> dict[int, PairRecord]:
        reporter = reporter or ConditionReporter(test_mode=True)
        profiles = record_loader.load(source, reporter)
        return pair_matcher.match(profiles, reporter)

    def _analyze_profiles(self, profiles: list[EmployeeProfile], reporter: ConditionReporter) -> PairingAnalysis:
        pairs = pair_matcher.match(profiles, reporter)
        result = pair_selector.select_longest(pairs)
        return PairingAnalysis(
            employee_count=len(profiles),
            relation_count=sum(len(r.partners) for r in pairs.values()),
            result=result,
            conditions=list(reporter.conditions),
        )

    def analyze(self, source: Iterable[str], reporter: ConditionReporter | None = None) -> PairingAnalysis:
        reporter = reporter or ConditionReporter(test_mode=True)
        profiles = record_loader.load(source, reporter)
        return self._analyze_profiles(profiles, reporter)

    def analyze_path(
        self,
        path: str | Path,
        reporter: ConditionReporter | None = None,
        encoding: str = "utf-8",
    ) -> PairingAnalysis:
        reporter = reporter or ConditionReporter(test_mode=True)
        logger.info("Processing employee file %s", path)
        profiles = record_loader.load_path(path, reporter, encoding=encoding)
        return self._analyze_profiles(profiles, reporter)


pairing_service = PairingService()
