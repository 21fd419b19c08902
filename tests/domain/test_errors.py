"""Tests for the CPI error taxonomy."""

from cpiwire.domain.errors import (
    CloudError,
    CpiError,
    DiskNotFound,
    ExternalCpiError,
    InvalidArguments,
    InvalidResponse,
    NoDiskSpace,
    NonExecutable,
    RetriableCloudError,
    UnknownError,
    VMNotFound,
    is_retryable,
)


class TestHierarchy:
    def test_retryable_kinds_are_cloud_errors(self):
        assert issubclass(NoDiskSpace, RetriableCloudError)
        assert issubclass(DiskNotFound, CloudError)

    def test_everything_shares_root(self):
        for cls in (CloudError, CpiError, UnknownError, InvalidResponse, NonExecutable):
            assert issubclass(cls, ExternalCpiError)

    def test_cpi_error_is_not_cloud_error(self):
        assert not issubclass(CpiError, CloudError)

    def test_invalid_arguments_is_type_error(self):
        assert issubclass(InvalidArguments, TypeError)


class TestIsRetryable:
    def test_flag_true(self):
        assert is_retryable(NoDiskSpace("full", ok_to_retry=True)) is True

    def test_flag_false(self):
        assert is_retryable(NoDiskSpace("full", ok_to_retry=False)) is False

    def test_kinds_without_flag(self):
        assert is_retryable(VMNotFound("gone")) is False
        assert is_retryable(InvalidResponse("bad")) is False
        assert is_retryable(NonExecutable("nope")) is False

    def test_foreign_exception(self):
        assert is_retryable(RuntimeError("x")) is False


class TestMessage:
    def test_message_verbatim(self):
        error = CloudError("  Quota exceeded: 10/10 \n", error_type="Bosh::Clouds::CloudError")
        assert str(error) == "  Quota exceeded: 10/10 \n"
        assert error.message == str(error)
        assert error.error_type == "Bosh::Clouds::CloudError"
