"""Unit tests for the IdentityProvider tag."""

import pytest

from identity_store.domain.error import (
    InvalidEncodingError,
    InvalidProviderError,
    ProviderDecodeError,
)
from identity_store.domain.value import IdentityProvider

WIRE_STRINGS = {
    IdentityProvider.GOOGLE: "google",
    IdentityProvider.GITHUB: "github",
    IdentityProvider.TWITCH: "twitch",
    IdentityProvider.REDDIT: "reddit",
    IdentityProvider.TWITTER: "twitter",
    IdentityProvider.DISCORD: "discord",
    IdentityProvider.FACEBOOK: "facebook",
}


class TestEncode:
    """Tests for IdentityProvider.to_wire()."""

    @pytest.mark.parametrize("provider,wire", WIRE_STRINGS.items())
    def test_encodes_fixed_lowercase_string(self, provider, wire):
        """Each provider encodes to its fixed wire string."""
        assert provider.to_wire() == wire

    def test_wire_strings_are_unique(self):
        """Encoding is injective."""
        encoded = [provider.to_wire() for provider in IdentityProvider]
        assert len(set(encoded)) == len(encoded)

    def test_every_provider_has_a_wire_string(self):
        """No provider is missing from the wire table."""
        assert set(IdentityProvider) == set(WIRE_STRINGS)


class TestDecode:
    """Tests for IdentityProvider.from_wire()."""

    @pytest.mark.parametrize("provider", list(IdentityProvider))
    def test_from_wire_inverts_to_wire(self, provider):
        """from_wire(to_wire(p)) == p for every provider."""
        assert IdentityProvider.from_wire(provider.to_wire()) is provider

    @pytest.mark.parametrize("provider", list(IdentityProvider))
    def test_decodes_utf8_bytes(self, provider):
        """Raw column bytes decode like text."""
        raw = provider.to_wire().encode("utf-8")
        assert IdentityProvider.from_wire(raw) is provider

    @pytest.mark.parametrize("value", ["", "swaply", "Google", "GITHUB", " twitch"])
    def test_unknown_string_is_invalid_provider(self, value):
        """Anything outside the fixed set fails, never defaults."""
        with pytest.raises(InvalidProviderError) as exc_info:
            IdentityProvider.from_wire(value)

        assert exc_info.value.value == value

    def test_malformed_bytes_is_invalid_encoding(self):
        """Bytes that are not UTF-8 fail with a distinct error."""
        with pytest.raises(InvalidEncodingError):
            IdentityProvider.from_wire(b"\xff\xfegoogle")

    def test_errors_share_a_base_class(self):
        """Callers can catch both decode failures together."""
        assert issubclass(InvalidProviderError, ProviderDecodeError)
        assert issubclass(InvalidEncodingError, ProviderDecodeError)


class TestStrBehaviour:
    """Providers still behave as plain strings."""

    @pytest.mark.parametrize("provider,wire", WIRE_STRINGS.items())
    def test_str_encode_is_untouched(self, provider, wire):
        """Drivers serialize text with str.encode(encoding)."""
        assert provider.encode("utf-8") == wire.encode("utf-8")
        assert provider.encode() == wire.encode()

    @pytest.mark.parametrize("provider,wire", WIRE_STRINGS.items())
    def test_compares_equal_to_wire_string(self, provider, wire):
        assert provider == wire
