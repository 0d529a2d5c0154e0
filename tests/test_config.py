"""Tests for configuration validation."""

import pytest

from sqlcheck import CheckConfig, ConfigurationError
from sqlcheck.rules import Category, Severity, count_at_least, get_rule


class TestDefaults:
    """Test default configuration values."""

    def test_defaults(self) -> None:
        config = CheckConfig()
        assert config.minimum_severity == Severity.INFO
        assert config.enabled_categories == frozenset(Category)
        assert config.print_statement is True
        assert config.verbose is True
        assert config.index_count_threshold == 3
        assert config.join_count_threshold == 5
        assert config.distinct_count_threshold == 5
        assert config.nesting_threshold == 2
        assert config.spaghetti_length_threshold == 500
        assert config.delimiter == ";"


class TestCoercion:
    """Strings are accepted where enums are expected."""

    def test_severity_from_string(self) -> None:
        assert CheckConfig(minimum_severity="ERROR").minimum_severity is Severity.ERROR

    def test_categories_from_strings(self) -> None:
        config = CheckConfig(enabled_categories=["Query", "logical"])
        assert config.enabled_categories == frozenset({Category.QUERY, Category.LOGICAL})

    def test_single_category_string(self) -> None:
        config = CheckConfig(enabled_categories="physical")
        assert config.enabled_categories == frozenset({Category.PHYSICAL})

    def test_disabled_rules_from_list(self) -> None:
        config = CheckConfig(disabled_rules=["select-star"])
        assert config.disabled_rules == frozenset({"select-star"})


class TestValidation:
    """Invalid options are rejected at construction time."""

    def test_unknown_category(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown category 'schema'") as exc:
            CheckConfig(enabled_categories={"schema"})
        assert exc.value.option == "enabled_categories"

    def test_unknown_severity(self) -> None:
        with pytest.raises(ConfigurationError) as exc:
            CheckConfig(minimum_severity="critical")
        assert exc.value.option == "minimum_severity"

    @pytest.mark.parametrize(
        "option", ["index_count_threshold", "join_count_threshold", "spaghetti_length_threshold"]
    )
    def test_non_positive_threshold(self, option: str) -> None:
        with pytest.raises(ConfigurationError) as exc:
            CheckConfig(**{option: 0})
        assert exc.value.option == option

    def test_non_integer_threshold(self) -> None:
        with pytest.raises(ConfigurationError, match="expected an integer"):
            CheckConfig(nesting_threshold="2")  # type: ignore[arg-type]

    def test_unknown_rule_id(self) -> None:
        with pytest.raises(ConfigurationError) as exc:
            CheckConfig(disabled_rules={"no-such-rule"})
        assert exc.value.option == "disabled_rules"

    def test_unknown_dialect(self) -> None:
        with pytest.raises(ConfigurationError) as exc:
            CheckConfig(dialect="no_such_dialect")
        assert exc.value.option == "dialect"

    def test_known_dialect(self) -> None:
        assert CheckConfig(dialect="postgres").dialect == "postgres"

    def test_empty_delimiter(self) -> None:
        with pytest.raises(ConfigurationError):
            CheckConfig(delimiter="")

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            CheckConfig(enabled_categories={"bogus"})


class TestRuleSelection:
    """Test should_run_rule and threshold resolution."""

    def test_category_filter(self) -> None:
        config = CheckConfig(enabled_categories={"logical"})
        assert config.should_run_rule(get_rule("generic-primary-key"))
        assert not config.should_run_rule(get_rule("select-star"))

    def test_severity_floor(self) -> None:
        config = CheckConfig(minimum_severity="warn")
        assert config.should_run_rule(get_rule("select-star"))  # error
        assert config.should_run_rule(get_rule("not-null-usage"))  # warn
        assert not config.should_run_rule(get_rule("null-usage"))  # info
        assert config.should_run_rule(get_rule("primary-key-exists"))  # warn
        assert config.should_run_rule(get_rule("foreign-key-exists"))  # warn

    def test_disabled_rule(self) -> None:
        config = CheckConfig(disabled_rules={"select-star"})
        assert not config.should_run_rule(get_rule("select-star"))

    def test_threshold_override(self) -> None:
        config = CheckConfig(join_count_threshold=2)
        assert config.threshold_for(get_rule("reduce-joins").policy) == 2

    def test_threshold_without_setting(self) -> None:
        assert CheckConfig().threshold_for(count_at_least(7)) == 7
