"""Tests for the Validator: construction, validation and message merging."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

import pytest

from i18nvalidate import (
    ConfigError,
    DefaultLocaleNotFoundError,
    FieldViolation,
    InvalidValidationError,
    LocaleEntry,
    NoLocalesSuppliedError,
    RecordValidationError,
    RegistrationError,
    RuleEngine,
    UnknownRuleError,
    ValidationOutcome,
    Validator,
    get_locale,
)


@dataclass
class User:
    FirstName: str = field(
        default="",
        metadata={"validate": "required", "trans": "en:First Name;pt:Primeiro Nome"},
    )
    Email: str = field(
        default="",
        metadata={"validate": "required,email", "trans": "en:Email;pt:E-mail"},
    )


@dataclass
class Address:
    City: str = field(
        default="",
        metadata={"validate": "required", "trans": "en:City;pt:Cidade"},
    )
    ZipCode: str = field(default="", metadata={"validate": "omitempty,len=5"})


@dataclass
class Customer:
    Name: str = field(
        default="",
        metadata={"validate": "required", "trans": "en:Full Name;pt:Nome Completo"},
    )
    HomeAddress: Address = field(default_factory=lambda: Address(City="Lisboa"))
    Billing: Optional[Address] = None
    Contacts: list[User] = field(default_factory=list)


@dataclass
class Broken:
    Value: str = field(default="", metadata={"validate": "no_such_rule"})


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Tests for building a Validator."""

    def test_requires_locales(self):
        with pytest.raises(NoLocalesSuppliedError):
            Validator("en")

    def test_default_locale_must_be_supplied(self):
        with pytest.raises(DefaultLocaleNotFoundError) as exc_info:
            Validator("fr", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))

        assert isinstance(exc_info.value, ConfigError)
        assert exc_info.value.default_locale == "fr"
        assert exc_info.value.available == ["en", "pt"]

    def test_default_locale_matches_exactly(self):
        with pytest.raises(DefaultLocaleNotFoundError):
            Validator("EN", LocaleEntry.builtin("en"))

    def test_callback_failure_aborts_construction(self):
        def failing(engine, context):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            Validator(
                "en",
                LocaleEntry.builtin("en"),
                LocaleEntry(locale=get_locale("pt"), register_translations=failing),
            )

    def test_conflicting_rule_template_aborts_construction(self):
        def conflicting(engine, context):
            engine.register_translation("required", context, "{0} is needed")

        with pytest.raises(RegistrationError):
            Validator(
                "en",
                LocaleEntry.builtin("en"),
                LocaleEntry(locale=get_locale("en"), register_translations=conflicting),
            )

    def test_callbacks_receive_their_locale_context(self):
        seen = []

        def record(engine, context):
            seen.append(context.locale_code)

        Validator(
            "en",
            LocaleEntry(locale=get_locale("en"), register_translations=record),
            LocaleEntry(locale=get_locale("ko"), register_translations=record),
        )

        assert seen == ["en", "ko"]

    def test_contexts_are_read_only(self, validator):
        assert validator.locales == ["en", "pt"]
        with pytest.raises(TypeError):
            validator.contexts["es"] = validator.contexts["en"]  # type: ignore[index]


# =============================================================================
# Validation
# =============================================================================


class TestValidate:
    """Tests for Validator.validate."""

    def test_valid_record(self, validator):
        user = User(FirstName="Daniel", Email="daniel@example.com")

        assert validator.validate(user) is None
        assert validator.validate(user, "pt") is None
        assert validator.validate(user, "es") is None

    def test_none_input(self, validator):
        assert validator.validate(None) is None
        assert validator.validate(None, "pt") is None

    def test_required_english(self, validator):
        outcome = validator.validate(User(), "en")

        assert isinstance(outcome, ValidationOutcome)
        assert len(outcome.translated) == 2
        msg = outcome.translated["User.FirstName"]
        assert "First Name" in msg
        assert "FirstName" not in msg
        assert msg == "First Name is a required field"
        assert outcome["User.Email"] == "Email is a required field"

    def test_required_portuguese(self, validator):
        outcome = validator.validate(User(), "pt")

        assert outcome["User.FirstName"] == "Primeiro Nome é obrigatório"
        assert outcome["User.Email"] == "E-mail é obrigatório"
        assert "FirstName" not in outcome["User.FirstName"]

    def test_fallback_to_default(self, validator):
        fallback = validator.validate(User(), "es")
        english = validator.validate(User(), "en")

        assert fallback.translated == english.translated
        assert "First Name" in fallback["User.FirstName"]

    def test_empty_locale_means_default(self, validator):
        assert validator.validate(User(), "").translated == validator.validate(User()).translated

    def test_invalid_email(self, validator):
        user = User(FirstName="Daniel", Email="not-an-email")

        en = validator.validate(user, "en")
        pt = validator.validate(user, "pt")

        assert en.namespaces == ["User.Email"]
        assert en["User.Email"] == "Email must be a valid email address"
        assert pt["User.Email"] == "E-mail deve ser um endereço de e-mail válido"

    def test_raw_violations_are_kept(self, validator):
        outcome = validator.validate(User(), "pt")

        assert [v.namespace for v in outcome.violations] == ["User.FirstName", "User.Email"]
        assert {v.rule for v in outcome.violations} == {"required"}
        assert outcome.violations[0].field == "FirstName"
        assert outcome.violations[0].owner == "User"

    def test_string_form_joins_messages(self, validator):
        outcome = validator.validate(User(), "en")
        text = str(outcome)

        assert "; " in text
        assert set(text.split("; ")) == {
            "First Name is a required field",
            "Email is a required field",
        }

    def test_field_without_display_name_keeps_rule_phrasing(self, validator):
        customer = Customer(Name="Ana", Billing=Address(City="Porto", ZipCode="123"))

        outcome = validator.validate(customer, "en")

        assert outcome.namespaces == ["Customer.Billing.ZipCode"]
        assert outcome["Customer.Billing.ZipCode"] == "ZipCode must be 5 characters in length"

    def test_nested_records(self, validator):
        customer = Customer(HomeAddress=Address(), Billing=Address())

        outcome = validator.validate(customer, "pt")

        assert outcome["Customer.Name"] == "Nome Completo é obrigatório"
        assert outcome["Customer.HomeAddress.City"] == "Cidade é obrigatório"
        assert outcome["Customer.Billing.City"] == "Cidade é obrigatório"

    def test_records_in_lists(self, validator):
        customer = Customer(
            Name="Ana",
            Contacts=[User("Rui", "rui@example.com"), User(Email="bad")],
        )

        outcome = validator.validate(customer, "en")

        assert set(outcome.namespaces) == {
            "Customer.Contacts[1].FirstName",
            "Customer.Contacts[1].Email",
        }
        assert outcome["Customer.Contacts[1].FirstName"] == "First Name is a required field"
        assert outcome["Customer.Contacts[1].Email"] == "Email must be a valid email address"

    def test_locally_declared_nested_records(self, validator):
        @dataclass
        class Branch:
            City: str = field(
                default="",
                metadata={"validate": "required", "trans": "en:Town;pt:Cidade"},
            )

        @dataclass
        class Office:
            Site: Optional[Branch] = None

        assert validator.validate(Office(Site=Branch()), "pt")["Office.Site.City"] == (
            "Cidade é obrigatório"
        )
        assert validator.validate(Office(Site=Branch()), "en")["Office.Site.City"] == (
            "Town is a required field"
        )

    def test_locale_without_display_names(self):
        validator = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("ko"))

        outcome = validator.validate(User(), "ko")

        assert outcome["User.FirstName"] == "FirstName 필드는 필수입니다"

    def test_non_record_input_is_an_engine_error(self, validator):
        with pytest.raises(InvalidValidationError):
            validator.validate("not a record")

    def test_unknown_rule_is_an_engine_error(self, validator):
        with pytest.raises(UnknownRuleError):
            validator.validate(Broken())

    def test_later_violation_overwrites_same_namespace(self):
        class DuplicateEngine(RuleEngine):
            def evaluate(self, data):
                return [
                    FieldViolation("User.FirstName", "FirstName", "User", "required"),
                    FieldViolation("User.FirstName", "FirstName", "User", "email"),
                ]

        validator = Validator("en", LocaleEntry.builtin("en"), engine=DuplicateEngine())

        outcome = validator.validate(User())

        assert len(outcome.violations) == 2
        assert outcome.translated == {
            "User.FirstName": "First Name must be a valid email address"
        }


class TestCheck:
    """Tests for Validator.check."""

    def test_valid_record(self, validator):
        assert validator.check(User("Daniel", "daniel@example.com")) is None

    def test_raises_with_outcome(self, validator):
        with pytest.raises(RecordValidationError) as exc_info:
            validator.check(User(), "pt")

        error = exc_info.value
        assert error.translated["User.FirstName"] == "Primeiro Nome é obrigatório"
        assert str(error) == str(error.outcome)


# =============================================================================
# Registration Behavior
# =============================================================================


class TestRegistrationBehavior:
    """Tests for repeated and concurrent first use of record types."""

    def test_repeated_validation_is_stable(self, validator):
        first = validator.validate(User(), "pt").translated
        for _ in range(3):
            assert validator.validate(User(), "pt").translated == first

        assert User in validator.registry.registered_types

    def test_nested_types_are_not_marked(self, validator):
        validator.validate(Customer(Name="Ana"))

        assert validator.registry.is_registered(Customer)
        assert not validator.registry.is_registered(Address)
        assert validator.contexts["pt"].lookup("Address.City") == "Cidade"

    def test_validators_are_independent(self):
        first = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))
        second = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))

        first.validate(User())

        assert first.registry.is_registered(User)
        assert not second.registry.is_registered(User)
        assert second.contexts["en"].lookup("User.FirstName") is None

    def test_concurrent_first_use(self):
        validator = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))
        barrier = threading.Barrier(8)

        def run(index: int) -> tuple[str, dict[str, str]]:
            locale = "pt" if index % 2 else "en"
            barrier.wait()
            return locale, validator.validate(User(), locale).translated

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run, range(8)))

        expected = {
            "en": {
                "User.FirstName": "First Name is a required field",
                "User.Email": "Email is a required field",
            },
            "pt": {
                "User.FirstName": "Primeiro Nome é obrigatório",
                "User.Email": "E-mail é obrigatório",
            },
        }
        for locale, translated in results:
            assert translated == expected[locale]
