"""Phase rule registry.

The phase rules form a first-match decision list ordered by ``order``.
The registry discovers the rules under ``adaptive_coach.rules.phase``,
allows one rule per position, and hands the detector the list in
evaluation order.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil

from adaptive_coach.rules.base import PhaseRule

logger = logging.getLogger(__name__)

PHASE_RULES_PACKAGE = "adaptive_coach.rules.phase"


class RuleOrderConflict(ValueError):
    """Two different phase rules claim the same position in the decision list."""


class PhaseRuleRegistry:
    """Holds the phase rules keyed by ``rule_id`` and unique by ``order``.

    Re-registering a ``rule_id`` replaces the earlier instance, so discovery
    can run more than once.
    """

    def __init__(self) -> None:
        self._rules: dict[str, PhaseRule] = {}
        self._by_order: dict[int, str] = {}

    def discover_rules(self, package: str = PHASE_RULES_PACKAGE) -> None:
        """Import every module under *package* and register its concrete rules."""
        pkg = importlib.import_module(package)
        for module_info in pkgutil.walk_packages(pkg.__path__, prefix=package + "."):
            module = importlib.import_module(module_info.name)
            for _name, cls in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(cls, PhaseRule)
                    and cls.__module__ == module.__name__
                    and not inspect.isabstract(cls)
                ):
                    self.register(cls())
        logger.debug("Discovered phase rules: %s", ", ".join(self.rule_ids))

    def register(self, rule: PhaseRule) -> None:
        """Add *rule*, replacing any rule with the same id.

        Raises:
            RuleOrderConflict: another rule already holds ``rule.order``.
        """
        holder = self._by_order.get(rule.order)
        if holder is not None and holder != rule.rule_id:
            raise RuleOrderConflict(
                f"{rule.rule_id!r} and {holder!r} both claim order {rule.order}"
            )
        previous = self._rules.get(rule.rule_id)
        if previous is not None:
            del self._by_order[previous.order]
        self._rules[rule.rule_id] = rule
        self._by_order[rule.order] = rule.rule_id

    def get(self, rule_id: str) -> PhaseRule | None:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[PhaseRule]:
        """Rules in evaluation order, lowest ``order`` first."""
        return [self._rules[self._by_order[order]] for order in sorted(self._by_order)]

    @property
    def rule_ids(self) -> list[str]:
        """Rule ids in evaluation order."""
        return [rule.rule_id for rule in self.get_all_rules()]
