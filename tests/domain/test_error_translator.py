"""Tests for ErrorTranslator."""

import pytest

from cpiwire.domain.errors import (
    CloudError,
    CpiError,
    DiskNotAttached,
    DiskNotFound,
    NoDiskSpace,
    UnknownError,
    VMCreationFailed,
    is_retryable,
)
from cpiwire.domain.services.error_registry import ErrorKind, ErrorRegistry
from cpiwire.domain.services.error_translator import ErrorTranslator


@pytest.fixture
def translator():
    return ErrorTranslator()


class TestKnownErrors:
    @pytest.mark.parametrize(
        "error_class", [NoDiskSpace, DiskNotAttached, DiskNotFound, VMCreationFailed]
    )
    def test_retryable(self, translator, error_class):
        error = translator.translate({
            "type": f"Bosh::Clouds::{error_class.__name__}",
            "message": "Not enough disk space",
            "ok_to_retry": True,
        })
        assert type(error) is error_class
        assert str(error) == "Not enough disk space"
        assert error.message == "Not enough disk space"
        assert error.ok_to_retry is True

    def test_retry_flag_taken_from_payload(self, translator):
        error = translator.translate({
            "type": "Bosh::Clouds::VMCreationFailed",
            "message": "quota",
            "ok_to_retry": False,
        })
        assert error.ok_to_retry is False
        assert is_retryable(error) is False

    def test_missing_retry_flag_defaults_false(self, translator):
        error = translator.translate({
            "type": "Bosh::Clouds::DiskNotFound",
            "message": "gone",
        })
        assert error.ok_to_retry is False

    @pytest.mark.parametrize("error_class", [CloudError, CpiError])
    def test_non_retryable(self, translator, error_class):
        error = translator.translate({
            "type": f"Bosh::Clouds::{error_class.__name__}",
            "message": "Something went wrong",
            "ok_to_retry": True,
        })
        assert type(error) is error_class
        assert str(error) == "Something went wrong"
        assert not hasattr(error, "ok_to_retry")
        assert is_retryable(error) is False

    def test_missing_message(self, translator):
        error = translator.translate({"type": "Bosh::Clouds::CloudError"})
        assert str(error) == ""


class TestUnknownErrors:
    def test_unrecognized_type(self, translator):
        error = translator.translate({
            "type": "FakeUnrecognizableError",
            "message": "Something went wrong",
            "ok_to_retry": True,
        })
        assert type(error) is UnknownError
        assert str(error) == (
            "Received unknown error from cpi: FakeUnrecognizableError "
            "with message Something went wrong"
        )
        assert error.error_type == "FakeUnrecognizableError"
        assert is_retryable(error) is False

    def test_message_with_braces_kept_verbatim(self, translator):
        error = translator.translate({"type": "Odd", "message": "{oops} {0}"})
        assert str(error) == "Received unknown error from cpi: Odd with message {oops} {0}"

    @pytest.mark.parametrize("wire_type", [None, 7, ["list"], {"nested": True}])
    def test_unexpected_type_values_never_raise(self, translator, wire_type):
        error = translator.translate({"type": wire_type, "message": "m"})
        assert isinstance(error, UnknownError)
        assert error.error_type is None

    def test_missing_type(self, translator):
        error = translator.translate({"message": "m"})
        assert str(error) == "Received unknown error from cpi:  with message m"

    def test_missing_message(self, translator):
        error = translator.translate({"type": "Foo"})
        assert str(error) == "Received unknown error from cpi: Foo with message "
        assert error.error_type == "Foo"

    def test_null_type_and_message(self, translator):
        error = translator.translate({"type": None, "message": None})
        assert str(error) == "Received unknown error from cpi:  with message "

    def test_custom_registry(self):
        translator = ErrorTranslator(ErrorRegistry([ErrorKind("Custom", CpiError)]))
        assert type(translator.translate({"type": "Custom", "message": "x"})) is CpiError
        assert type(
            translator.translate({"type": "Bosh::Clouds::CpiError", "message": "x"})
        ) is UnknownError
