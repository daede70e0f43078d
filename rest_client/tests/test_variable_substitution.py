"""
Property-based tests for the variable substitution service.

Covers placeholder extraction, substitution correctness, preservation of
undefined placeholders, the single-scan rule and draft-wide substitution.
"""

import pytest
from hypothesis import given, strategies as st, settings

from rest_client.schemas.request import RequestDraft
from rest_client.services.variable_substitution import (
    extract_variables,
    substitute,
    substitute_draft,
)


# Strategy for generating valid variable names (alphanumeric + underscore)
variable_name_strategy = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"),
    min_size=1,
    max_size=20,
).filter(lambda s: s[0].isalpha() or s[0] == "_")  # Must start with letter or underscore

# Strategy for generating variable values
variable_value_strategy = st.text(min_size=0, max_size=100)

plain_value_strategy = variable_value_strategy.filter(lambda v: "{{" not in v and "}}" not in v)


class TestKnownSubstitutions:
    """Fixed examples of the substitution contract."""

    def test_replaces_each_variable(self):
        assert substitute("{{a}}-{{b}}", {"a": "1", "b": "2"}) == "1-2"

    def test_unmatched_placeholder_left_verbatim(self):
        assert substitute("{{a}}", {}) == "{{a}}"

    def test_inserted_placeholder_is_not_rescanned(self):
        assert substitute("{{x}}", {"x": "{{y}}", "y": "z"}) == "{{y}}"

    def test_inserted_placeholder_not_rescanned_regardless_of_order(self):
        assert substitute("{{x}}", {"y": "z", "x": "{{y}}"}) == "{{y}}"

    def test_replaces_every_occurrence(self):
        assert substitute("{{id}}/{{id}}/{{id}}", {"id": "7"}) == "7/7/7"

    def test_keys_are_literal_not_patterns(self):
        variables = {"a.b": "dot", "c+": "plus", "(d)": "paren"}
        assert substitute("{{a.b}} {{axb}} {{c+}} {{(d)}}", variables) == "dot {{axb}} plus paren"

    def test_values_are_literal(self):
        assert substitute("{{v}}", {"v": r"$1 \1 \g<0>"}) == r"$1 \1 \g<0>"

    def test_single_braces_untouched(self):
        assert substitute("{a} {{ a }} {{a}", {"a": "x"}) == "{a} {{ a }} {{a}"

    @pytest.mark.parametrize("template", ["", None])
    def test_empty_template(self, template):
        assert substitute(template, {"a": "1"}) == template


class TestVariablePlaceholderExtraction:
    """
    Extraction of {{variable_name}} placeholders.
    """

    @given(var_names=st.lists(variable_name_strategy, min_size=1, max_size=5, unique=True))
    @settings(max_examples=100)
    def test_extracts_all_variables_from_template(self, var_names: list[str]):
        """
        Property: For any template with {{variable}} placeholders,
        extract_variables should return all variable names.
        """
        template = " ".join("{{" + name + "}}" for name in var_names)

        extracted = extract_variables(template)

        assert set(extracted) == set(var_names)

    @given(text=st.text(min_size=0, max_size=100).filter(lambda s: "{{" not in s))
    @settings(max_examples=100)
    def test_returns_empty_for_no_placeholders(self, text: str):
        """
        Property: For any text without placeholders, extract_variables returns empty list.
        """
        assert extract_variables(text) == []


class TestVariableSubstitutionCorrectness:
    """
    Defined placeholders are replaced by their values and nothing else changes.
    """

    @given(var_name=variable_name_strategy, var_value=variable_value_strategy)
    @settings(max_examples=100)
    def test_defined_variable_is_replaced(self, var_name: str, var_value: str):
        """
        Property: A defined variable placeholder is replaced with its value,
        even when the value itself looks like a placeholder.
        """
        assert substitute("{{" + var_name + "}}", {var_name: var_value}) == var_value

    @given(
        variables=st.dictionaries(
            keys=variable_name_strategy,
            values=plain_value_strategy,
            min_size=1,
            max_size=5
        )
    )
    @settings(max_examples=100)
    def test_all_defined_variables_are_replaced(self, variables: dict[str, str]):
        """
        Property: All defined variable placeholders are replaced with their values.
        """
        template = " ".join("{{" + name + "}}" for name in variables.keys())

        result = substitute(template, variables)

        assert result == " ".join(variables.values())

    @given(
        var_name=variable_name_strategy,
        var_value=plain_value_strategy,
        prefix=st.text(max_size=20).filter(lambda s: "{" not in s and "}" not in s),
        suffix=st.text(max_size=20).filter(lambda s: "{" not in s and "}" not in s)
    )
    @settings(max_examples=100)
    def test_substitution_preserves_surrounding_text(self, var_name: str, var_value: str, prefix: str, suffix: str):
        """
        Property: Substitution replaces only the placeholder, preserving surrounding text.
        """
        template = prefix + "{{" + var_name + "}}" + suffix

        assert substitute(template, {var_name: var_value}) == prefix + var_value + suffix


class TestUndefinedVariablePreservation:
    """
    Placeholders with no matching variable stay exactly as written.
    """

    @given(
        defined_vars=st.dictionaries(
            keys=variable_name_strategy,
            values=plain_value_strategy,
            min_size=1,
            max_size=3
        ),
        undefined_var=variable_name_strategy
    )
    @settings(max_examples=100)
    def test_mixed_defined_and_undefined_variables(self, defined_vars: dict[str, str], undefined_var: str):
        """
        Property: When template has both defined and undefined variables,
        defined ones are replaced and undefined ones are preserved.
        """
        if undefined_var in defined_vars:
            return

        parts = ["{{" + name + "}}" for name in defined_vars.keys()]
        parts.append("{{" + undefined_var + "}}")
        template = " ".join(parts)

        result = substitute(template, defined_vars)

        assert result.endswith("{{" + undefined_var + "}}")
        for var_name in defined_vars.keys():
            assert "{{" + var_name + "}}" not in result

    @given(template=st.text(max_size=100))
    @settings(max_examples=100)
    def test_empty_mapping_is_identity(self, template: str):
        assert substitute(template, {}) == template


class TestDraftSubstitution:
    """Substitution applies to URL, body, header keys and header values."""

    def test_substitutes_every_part_of_the_draft(self):
        draft = RequestDraft(
            url="{{base}}/users/{{id}}",
            method="POST",
            headers={"X-{{hdr}}": "Bearer {{token}}", "Accept": "application/json"},
            body='{"id": "{{id}}"}',
            name="create {{id}}",
        )
        variables = {"base": "https://api.example.com", "id": "42", "hdr": "Auth", "token": "t0k"}

        result = substitute_draft(draft, variables)

        assert result.url == "https://api.example.com/users/42"
        assert result.headers == {"X-Auth": "Bearer t0k", "Accept": "application/json"}
        assert result.body == '{"id": "42"}'
        assert result.method == "POST"
        # The label is not part of the outgoing request
        assert result.name == "create {{id}}"

    def test_original_draft_is_not_modified(self):
        draft = RequestDraft(url="{{base}}/x", method="GET", headers={"{{k}}": "{{v}}"})

        substitute_draft(draft, {"base": "http://h", "k": "K", "v": "V"})

        assert draft.url == "{{base}}/x"
        assert draft.headers == {"{{k}}": "{{v}}"}

    def test_missing_body_stays_missing(self):
        draft = RequestDraft(url="{{u}}", method="GET")

        result = substitute_draft(draft, {"u": "http://h"})

        assert result.body is None

    def test_unresolved_placeholders_are_kept(self):
        draft = RequestDraft(url="{{base}}/{{missing}}", method="GET", headers={"{{nope}}": "x"})

        result = substitute_draft(draft, {"base": "http://h"})

        assert result.url == "http://h/{{missing}}"
        assert result.headers == {"{{nope}}": "x"}
