"""Strongly typed identifiers for identity store records."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
