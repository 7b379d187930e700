"""Phase rules, discovered by PhaseRuleRegistry and evaluated by ``order``."""
