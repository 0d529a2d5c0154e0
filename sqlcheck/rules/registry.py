"""Rule registry holding the ordered anti-pattern catalog."""

from __future__ import annotations

from .base import Category, Rule, Severity


class RuleRegistry:
    """Central registry for anti-pattern rules.

    Rules are registered when their catalog modules are imported. The
    catalog order is category order (Logical, Physical, Query, Application)
    and, within a category, declaration order, regardless of which catalog
    module happened to be imported first.

    Example:
        registry = RuleRegistry.get_instance()

        # Every rule, in catalog order
        rules = registry.all()

        # Only query rules
        query_rules = registry.by_category(Category.QUERY)
    """

    _instance: RuleRegistry | None = None

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    @classmethod
    def get_instance(cls) -> RuleRegistry:
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, rule: Rule) -> None:
        """Register a rule with the registry.

        Raises:
            ValueError: If a rule with the same ID is already registered
        """
        if rule.rule_id in self._rules:
            raise ValueError(f"Rule '{rule.rule_id}' is already registered")
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def all(self) -> tuple[Rule, ...]:
        """Get all registered rules in catalog order."""
        # sorted() is stable, so declaration order survives within a category
        return tuple(sorted(self._rules.values(), key=lambda r: r.category.rank))

    def by_category(self, category: Category) -> tuple[Rule, ...]:
        return tuple(r for r in self.all() if r.category == category)

    def by_severity_minimum(self, minimum: Severity) -> tuple[Rule, ...]:
        """Get rules with severity >= the specified minimum.

        Severity order: ERROR > WARN > INFO
        """
        return tuple(r for r in self.all() if r.severity.rank >= minimum.rank)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules


def _ensure_rules_loaded() -> None:
    """Ensure all catalog modules are imported and rules are registered."""
    from . import application, logical, physical, query  # noqa: F401


def get_registry() -> RuleRegistry:
    _ensure_rules_loaded()
    return RuleRegistry.get_instance()


def get_all_rules() -> tuple[Rule, ...]:
    """Get every rule in catalog order."""
    return get_registry().all()


def get_rule(rule_id: str) -> Rule | None:
    return get_registry().get(rule_id)
