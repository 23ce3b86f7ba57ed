"""Unit tests for the line parsers.

Tests cover:
- Text utilities (case folding, trimming, numbers, counts)
- Antecedent splitting on "y" / "o"
- Rule line parsing and its failure points
- Fact line parsing and its failure points
"""

import logging

import pytest

from sbr.errors import LoadError, LoadErrorKind
from sbr.parsing import (
    FC_MARKER,
    fold_case,
    trim,
    find_marker,
    rfind_marker,
    parse_certainty,
    parse_count,
    split_literals,
    parse_antecedent,
    parse_rule_line,
    parse_fact_line,
)
from sbr.schema import Fact, LogicalOperator


# ==============================================================================
# Text Utilities Tests
# ==============================================================================


class TestFoldCase:
    """Test length-preserving case folding."""

    def test_lowercases_ascii(self):
        assert fold_case("Si h2 Y h3 ENTONCES h1") == "si h2 y h3 entonces h1"

    def test_preserves_length(self):
        """Characters with multi-char lower forms are left as-is."""
        text = "İstanbul y Ñandú"
        folded = fold_case(text)
        assert len(folded) == len(text)
        assert folded.endswith("y ñandú")


class TestTrim:
    """Test whitespace trimming."""

    def test_strips_all_whitespace_kinds(self):
        assert trim(" \t\r\n\f\vh1 \t\n") == "h1"

    def test_only_whitespace_trims_to_empty(self):
        assert trim(" \t \n") == ""

    def test_inner_whitespace_kept(self):
        assert trim("  tiene  fiebre ") == "tiene  fiebre"


class TestNumbers:
    """Test certainty factor and count parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [("0.5", 0.5), ("1", 1.0), ("-0.5", -0.5), ("+.25", 0.25), (" 0.7 ", 0.7), ("1e-1", 0.1)],
    )
    def test_valid_certainty(self, text, expected):
        assert parse_certainty(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "0.5x", "inf", "nan", "0x10", "1_0", "."])
    def test_invalid_certainty(self, text):
        with pytest.raises(ValueError):
            parse_certainty(text)

    def test_valid_count(self):
        assert parse_count(" 4\n") == 4
        assert parse_count("0") == 0

    @pytest.mark.parametrize("text", ["", "four", "4.0", "-1", "4 reglas"])
    def test_invalid_count(self, text):
        with pytest.raises(ValueError):
            parse_count(text)


class TestFcMarker:
    """Test the FC= marker search."""

    def test_last_occurrence_wins(self):
        folded = "si fc=x entonces h1, fc=0.5"
        assert rfind_marker(folded, FC_MARKER) == (21, 24)

    def test_spaces_around_equals(self):
        assert rfind_marker("h1, fc = 0.5", FC_MARKER) == (4, 8)

    def test_missing(self):
        assert rfind_marker("h1, 0.5", FC_MARKER) is None

    def test_first_occurrence(self):
        assert find_marker("fc=1, fc = 2", FC_MARKER) == (0, 3)
        assert find_marker("fc=1, fc = 2", FC_MARKER, start=1) == (6, 10)
        assert find_marker("h1", FC_MARKER) is None


# ==============================================================================
# Antecedent Tests
# ==============================================================================


class TestSplitLiterals:
    """Test slicing the original text on folded keyword offsets."""

    def test_keeps_original_case(self):
        text = "Fiebre Y Tos Y Dolor"
        assert split_literals(text, fold_case(text), " y ") == ["Fiebre", "Tos", "Dolor"]

    def test_no_token_returns_whole_text(self):
        assert split_literals("h1", "h1", " y ") == ["h1"]

    def test_empty_segments_are_returned(self):
        text = "h2 y  y h3"
        assert split_literals(text, text, " y ") == ["h2", "", "h3"]


class TestParseAntecedent:
    """Test antecedent parsing."""

    def test_single_literal(self):
        ant = parse_antecedent("h4")
        assert ant.operator == LogicalOperator.NONE
        assert ant.conditions == (Fact(name="h4"),)

    def test_and(self):
        ant = parse_antecedent("h5 y h6 y h7")
        assert ant.operator == LogicalOperator.AND
        assert ant.names == ["h5", "h6", "h7"]

    def test_or(self):
        ant = parse_antecedent("h2 o h3")
        assert ant.operator == LogicalOperator.OR
        assert ant.names == ["h2", "h3"]

    def test_keywords_case_insensitive(self):
        ant = parse_antecedent("Alta Temperatura O Tos Seca")
        assert ant.operator == LogicalOperator.OR
        assert ant.names == ["Alta Temperatura", "Tos Seca"]

    def test_conditions_have_no_certainty(self):
        ant = parse_antecedent("h5 y h6")
        assert all(c.certainty is None for c in ant.conditions)

    def test_unpadded_keyword_is_part_of_name(self):
        """'y' and 'o' only act as operators when surrounded by spaces."""
        ant = parse_antecedent("rayo y oyente")
        assert ant.names == ["rayo", "oyente"]
        ant = parse_antecedent("ojo")
        assert ant.operator == LogicalOperator.NONE

    def test_first_operator_wins(self):
        """A mixed antecedent is split on the first keyword only."""
        ant = parse_antecedent("a y b o c")
        assert ant.operator == LogicalOperator.AND
        assert ant.names == ["a", "b o c"]

        ant = parse_antecedent("a o b y c")
        assert ant.operator == LogicalOperator.OR
        assert ant.names == ["a", "b y c"]

    def test_mixed_operators_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sbr.parsing.antecedent"):
            parse_antecedent("a y b o c")
        assert "mixes" in caplog.text

    def test_empty_middle_literal(self):
        with pytest.raises(LoadError) as exc_info:
            parse_antecedent("h2 y  y h3")
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_ANTECEDENT

    def test_doubled_or(self):
        with pytest.raises(LoadError) as exc_info:
            parse_antecedent("h2 o  o h3")
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_ANTECEDENT

    def test_empty_text(self):
        with pytest.raises(LoadError) as exc_info:
            parse_antecedent("   ")
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_ANTECEDENT


# ==============================================================================
# Rule Line Tests
# ==============================================================================


class TestParseRuleLine:
    """Test parsing of complete rule lines."""

    def test_or_rule(self):
        rule = parse_rule_line("R1: Si h2 o h3 Entonces h1, FC = 0.5")
        assert rule.id == "R1"
        assert rule.antecedent.operator == LogicalOperator.OR
        assert rule.antecedent.names == ["h2", "h3"]
        assert rule.consequent == Fact(name="h1")
        assert rule.rule_certainty == pytest.approx(0.5)

    def test_single_condition(self):
        rule = parse_rule_line("R2: Si h4 Entonces h1, FC = 1")
        assert rule.antecedent.operator == LogicalOperator.NONE
        assert rule.antecedent.names == ["h4"]
        assert rule.rule_certainty == 1.0

    def test_and_rule(self):
        rule = parse_rule_line("R3: Si h5 y h6 Entonces h3, FC=0.7")
        assert rule.antecedent.operator == LogicalOperator.AND
        assert rule.antecedent.names == ["h5", "h6"]
        assert rule.consequent.name == "h3"

    def test_negative_certainty(self):
        rule = parse_rule_line("R4: Si h7 Entonces h3, FC = -0.5")
        assert rule.rule_certainty == pytest.approx(-0.5)

    def test_keywords_case_insensitive(self):
        rule = parse_rule_line("r9 : SI Fiebre Y Tos ENTONCES Gripe , fc= .8")
        assert rule.id == "r9"
        assert rule.antecedent.names == ["Fiebre", "Tos"]
        assert rule.consequent.name == "Gripe"
        assert rule.rule_certainty == pytest.approx(0.8)

    def test_last_fc_marker_is_used(self):
        """An earlier 'fc=' inside a name does not end the rule."""
        rule = parse_rule_line("R5: Si fc=alto Entonces riesgo, FC = 0.9")
        assert rule.antecedent.names == ["fc=alto"]
        assert rule.rule_certainty == pytest.approx(0.9)

    def test_comma_inside_consequent(self):
        rule = parse_rule_line("R6: Si a Entonces b, c, FC = 0.2")
        assert rule.consequent.name == "b, c"

    def test_consequent_has_no_certainty(self):
        rule = parse_rule_line("R1: Si h2 Entonces h1, FC = 0.5")
        assert rule.consequent.certainty is None

    def test_rule_is_immutable(self):
        rule = parse_rule_line("R1: Si h2 Entonces h1, FC = 0.5")
        with pytest.raises(Exception):
            rule.id = "R2"

    @pytest.mark.parametrize(
        "line,fragment",
        [
            ("R1 Si h2 Entonces h1, FC = 0.5", "':'"),
            (": Si h2 Entonces h1, FC = 0.5", "rule id"),
            ("R1: Si h2 Entonces h1, 0.5", "'FC='"),
            ("R1: Si h2 Entonces h1 FC = 0.5", "','"),
            ("R1: Si h2 Entonces h1, FC = alto", "certainty"),
            ("R1: Si h2 Entonces h1, FC =", "certainty"),
            ("R1: h2 Entonces h1, FC = 0.5", "'Si'"),
            ("R1: Sih2 Entonces h1, FC = 0.5", "'Si'"),
            ("R1: Si h2 h1, FC = 0.5", "'Entonces'"),
            ("R1: Si Entonces h1, FC = 0.5", "antecedent"),
        ],
    )
    def test_malformed(self, line, fragment):
        with pytest.raises(LoadError) as exc_info:
            parse_rule_line(line)
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_RULE_LINE
        assert fragment in exc_info.value.message

    def test_invalid_certainty_reports_text(self):
        with pytest.raises(LoadError) as exc_info:
            parse_rule_line("R1: Si h2 Entonces h1, FC = 0,5x")
        assert exc_info.value.text == "0,5x"

    def test_antecedent_error_propagates(self):
        with pytest.raises(LoadError) as exc_info:
            parse_rule_line("R1: Si h2 y  y h3 Entonces h1, FC = 0.5")
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_ANTECEDENT


# ==============================================================================
# Fact Line Tests
# ==============================================================================


class TestParseFactLine:
    """Test parsing of fact lines."""

    def test_basic(self):
        assert parse_fact_line("h5, FC = 0.6") == Fact(name="h5", certainty=0.6)

    def test_compact_marker(self):
        fact = parse_fact_line("h2,fc=0.3")
        assert fact.name == "h2"
        assert fact.certainty == pytest.approx(0.3)

    def test_name_keeps_case_and_inner_spaces(self):
        fact = parse_fact_line("  Tiene Fiebre , Fc = -1 ")
        assert fact.name == "Tiene Fiebre"
        assert fact.certainty == -1.0

    def test_last_comma_splits(self):
        fact = parse_fact_line("a, b, FC = 0.1")
        assert fact.name == "a, b"

    @pytest.mark.parametrize(
        "line",
        [
            "h5 FC = 0.6",
            ", FC = 0.6",
            "h5, 0.6",
            "h5, CF = 0.6",
            "h5, valor FC = 0.6",
            "h5, FC = ",
            "h5, FC = seis",
        ],
    )
    def test_malformed(self, line):
        with pytest.raises(LoadError) as exc_info:
            parse_fact_line(line)
        assert exc_info.value.kind == LoadErrorKind.MALFORMED_FACT_LINE
        assert exc_info.value.line_number is None
