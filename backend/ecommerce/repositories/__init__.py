"""Repository package exposing persistence-layer access for domain models."""

from __future__ import annotations

from ecommerce.repositories.base import BaseRepository
from ecommerce.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
