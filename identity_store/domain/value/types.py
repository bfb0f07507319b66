"""Identity provider tag.

Each provider has a fixed lowercase wire string. Adding a provider is an
additive change: append a member with a new wire string. Existing wire
strings are stored in the database and must never be renamed.
"""

from enum import Enum
from typing import Union

from identity_store.domain.error import InvalidEncodingError, InvalidProviderError


class IdentityProvider(str, Enum):
    """External identity sources a user can link to their account.

    Subject ids issued by the provider are stored as opaque strings, even
    for providers that issue numeric ids (GitHub, Twitter).
    """

    GOOGLE = "google"
    GITHUB = "github"
    TWITCH = "twitch"
    REDDIT = "reddit"
    TWITTER = "twitter"
    DISCORD = "discord"
    FACEBOOK = "facebook"

    def to_wire(self) -> str:
        """Return the wire string stored in the database."""
        return self.value

    @classmethod
    def from_wire(cls, value: Union[str, bytes]) -> "IdentityProvider":
        """Decode a wire string (or its UTF-8 bytes) into a provider.

        Args:
            value: Wire string or raw bytes read from a column

        Returns:
            The matching provider

        Raises:
            InvalidEncodingError: If bytes are not valid UTF-8
            InvalidProviderError: If the text matches no provider
        """
        if isinstance(value, (bytes, bytearray)):
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidEncodingError(bytes(value)) from e

        try:
            return cls(value)
        except ValueError as e:
            raise InvalidProviderError(value) from e
