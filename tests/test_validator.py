"""
Tests for rule descriptor parsing and the element validator.
"""

import pytest

from prettyforms.adapters.extractors import ValueExtractors
from prettyforms.adapters.memory import MemoryPage
from prettyforms.schemas.form_data import FieldKind, FormField, RuleToken
from prettyforms.services.rules import DEFAULT_MESSAGES, default_registry
from prettyforms.services.validator import ElementValidator, parse_descriptor


class TestParseDescriptor:
    """Tests for parse_descriptor."""

    def test_empty(self):
        """Test that missing or empty attributes give no tokens."""
        assert parse_descriptor(None).tokens == ()
        assert parse_descriptor("").tokens == ()

    def test_order_and_params(self):
        """Test that tokens keep declaration order and parameters."""
        descriptor = parse_descriptor("notempty; minlength : 5 ;isemail")

        assert descriptor.tokens == (
            RuleToken(rule_name="notempty"),
            RuleToken(rule_name="minlength", param="5"),
            RuleToken(rule_name="isemail"),
        )

    def test_splits_on_first_colon_only(self):
        """Test that parameters may contain colons."""
        descriptor = parse_descriptor("hasdomain:http://a.com, https://b.com")

        assert descriptor.tokens[0].rule_name == "hasdomain"
        assert descriptor.tokens[0].param == "http://a.com, https://b.com"

    def test_drops_empty_tokens(self):
        """Test that stray separators are ignored."""
        assert len(parse_descriptor("notempty;;  ;").tokens) == 1

    def test_empty_param_is_kept(self):
        """Test that ``name:`` yields an empty, not absent, parameter."""
        assert parse_descriptor("minlength:").tokens[0].param == ""

    def test_parsed_once(self):
        """Test that the same attribute is parsed only once."""
        assert parse_descriptor("notempty;isemail") is parse_descriptor("notempty;isemail")


class TestElementValidator:
    """Tests for ElementValidator.validate."""

    def test_collects_every_failing_rule(self, validator, page):
        """Test that validation does not stop at the first failure."""
        field = FormField(name="nick", rules="notempty;minlength:5", value="")

        outcome = validator.validate(field)

        assert not outcome.valid
        assert outcome.messages == (
            DEFAULT_MESSAGES["notempty"],
            "At least 5 characters.",
        )

    def test_email_scenarios(self, validator):
        """Test the notempty/isemail interplay."""
        field = FormField(name="email", rules="notempty;isemail", value="bad")
        assert validator.validate(field).messages == (DEFAULT_MESSAGES["isemail"],)

        field.value = ""
        assert validator.validate(field).messages == (DEFAULT_MESSAGES["notempty"],)

        field.value = "user@example.com"
        assert validator.validate(field).valid

    def test_invisible_field_is_exempt(self, validator, page):
        """Test that hidden plain fields are not validated."""
        field = FormField(name="token", rules="notempty", value="", visible=False)

        assert validator.validate(field).valid
        assert "token" not in page.error_containers

    def test_invisible_enhanced_field_is_validated(self, validator):
        """Test that fields replaced by a rich widget are still checked."""
        field = FormField(
            name="tags", kind=FieldKind.SELECT, rules="notempty", value="",
            visible=False, enhanced=True,
        )

        assert not validator.validate(field).valid

    def test_no_rules(self, validator, page):
        """Test that fields without rules are valid and untouched."""
        assert validator.validate(FormField(name="free", value="")).valid
        assert "free" not in page.error_containers

    def test_unknown_rule_is_skipped(self, validator):
        """Test that unresolvable rule names are ignored."""
        field = FormField(name="x", rules="nosuchrule;notempty", value="ok")

        assert validator.validate(field).valid

    def test_renders_invalid(self, validator, page, settings):
        """Test that failures are rendered inline as local errors."""
        field = FormField(name="age", rules="isnumeric", value="abc")

        validator.validate(field)

        container = page.error_containers["age"]
        assert container.visible
        assert container.server_error is False
        assert container.html == settings.render_message(DEFAULT_MESSAGES["isnumeric"])

    def test_renders_valid(self, validator, page):
        """Test that a field turning valid hides its errors."""
        field = FormField(name="age", rules="isnumeric", value="abc")
        validator.validate(field)

        field.value = "42"
        validator.validate(field)

        assert page.error_html("age") is None
        assert page.error_containers["age"].checked

    def test_sticky_server_error(self, validator, page):
        """Test that a server-flagged field stays invalid without re-checking."""
        field = FormField(name="email", rules="isemail", value="user@example.com")
        validator.mark_server_error(field, ["Already taken."])

        outcome = validator.validate(field)

        assert not outcome.valid
        assert outcome.messages == ()
        assert page.error_containers["email"].server_error
        assert "Already taken." in page.error_html("email")

    def test_clear_server_errors(self, validator):
        """Test clearing sticky flags."""
        flagged = FormField(name="a", rules="notempty", value="x", has_server_error=True)
        clean = FormField(name="b", rules="notempty", value="x")

        assert validator.clear_server_errors([flagged, clean]) == 1
        assert validator.validate(flagged).valid

    def test_richtext_goes_through_extractor(self, settings):
        """Test that rich-text values come from the registered extractor."""
        editors = {"body": "<p>Hello</p>"}
        page = MemoryPage(
            extractors=ValueExtractors({FieldKind.RICHTEXT: lambda f: editors[f.name]})
        )
        validator = ElementValidator(default_registry(), page, settings)
        field = FormField(
            name="body", kind=FieldKind.RICHTEXT, rules="notempty", value="",
            visible=False, enhanced=True,
        )

        assert validator.validate(field).valid

        editors["body"] = ""
        assert not validator.validate(field).valid

    def test_custom_rule(self, validator):
        """Test that late-registered rules take part in validation."""
        validator.registry.register(
            "startswith", "Must start with {%}.", lambda ctx, v, p: str(v).startswith(p)
        )
        field = FormField(name="code", rules="startswith:AB", value="XY1")

        assert validator.validate(field).messages == ("Must start with AB.",)

    @pytest.mark.parametrize("value", ["secret", "other"])
    def test_passretry_reads_page(self, settings, value):
        """Test the cross-field check through the page."""
        page = MemoryPage()
        page.add_container("#signup", [
            FormField(name="password", value="secret"),
            FormField(name="password2", rules="passretry", value=value),
        ])
        validator = ElementValidator(default_registry(), page, settings)

        outcome = validator.validate(page.find_field("password2"))

        assert outcome.valid is (value == "secret")
