"""Tests for credential exceptions."""

import pytest

from yuihub_client_core.auth.exceptions import CredentialError, SecretStoreError


class TestCredentialError:
    """Test CredentialError base exception."""

    def test_can_be_raised(self):
        """Test that CredentialError can be raised."""
        with pytest.raises(CredentialError):
            raise CredentialError("Test error")

    def test_exception_message(self):
        """Test that exception message is preserved."""
        try:
            raise CredentialError("Custom error message")
        except CredentialError as e:
            assert str(e) == "Custom error message"


class TestSecretStoreError:
    """Test SecretStoreError exception."""

    def test_is_credential_error(self):
        """Test that SecretStoreError is a CredentialError."""
        with pytest.raises(CredentialError):
            raise SecretStoreError("Test error")

    def test_key_attribute(self):
        error = SecretStoreError("Cannot read", key="yuihub.apiKey")
        assert error.key == "yuihub.apiKey"

    def test_key_defaults_to_none(self):
        error = SecretStoreError("Cannot read")
        assert error.key is None
