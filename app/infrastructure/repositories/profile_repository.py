"""Recipient directory backed by the profile table."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Recipient
from app.infrastructure.models import ProfileModel


class ProfileRepository:
    """Resolve user identifiers to contact details."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> Recipient | None:
        model = self.session.get(ProfileModel, user_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, *, email: str, full_name: str | None = None, user_id: str | None = None) -> Recipient:
        """Insert a profile row.

        Profiles are owned by the account service; this exists to seed
        recipients in tests and local databases.
        """

        model = ProfileModel(email=email, full_name=full_name)
        if user_id:
            model.id = user_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProfileModel) -> Recipient:
        return Recipient(email=model.email, full_name=model.full_name, user_id=model.id)


__all__ = ["ProfileRepository"]
