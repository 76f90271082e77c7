"""Tests for the exception hierarchy."""

import pytest

from appimage_integration.exceptions import (
    EntryFormatError,
    ExtractionError,
    IconError,
    IntegrationError,
    InvalidParameterError,
    NotFoundError,
    NotSupportedError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_class",
    [
        InvalidParameterError,
        NotFoundError,
        NotSupportedError,
        EntryFormatError,
        ValidationError,
        ExtractionError,
        IconError,
    ],
)
def test_all_errors_derive_from_integration_error(error_class):
    error = error_class("boom")

    assert isinstance(error, IntegrationError)
    assert error.message == "boom"
    assert str(error) == f"{error_class.error_prefix}: boom"


def test_target_is_part_of_message():
    error = NotFoundError("Desktop entry not found", target="/apps/x.AppImage")

    assert error.target == "/apps/x.AppImage"
    assert str(error) == (
        "Not found for '/apps/x.AppImage': Desktop entry not found"
    )
