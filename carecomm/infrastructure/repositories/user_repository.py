"""Persistence layer for care-team users."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from carecomm.domain.entities import User
from carecomm.infrastructure.models import ResidentModel, UserModel, user_resident_table


class UserRepository:
    """Provide lookups for user entities and their resident assignments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def list_for_resident(self, resident_id: int) -> Sequence[User]:
        """Return the care team assigned to ``resident_id``."""

        query = (
            self.session.query(UserModel)
            .join(user_resident_table, user_resident_table.c.user_id == UserModel.id)
            .filter(user_resident_table.c.resident_id == resident_id)
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_facility(self, facility_id: int) -> Sequence[User]:
        """Return every distinct user assigned to a resident of ``facility_id``."""

        query = (
            self.session.query(UserModel)
            .join(user_resident_table, user_resident_table.c.user_id == UserModel.id)
            .join(ResidentModel, ResidentModel.id == user_resident_table.c.resident_id)
            .filter(ResidentModel.facility_id == facility_id)
            .distinct()
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def assign_to_resident(self, user_id: int, resident_id: int) -> None:
        user = self.session.get(UserModel, user_id)
        resident = self.session.get(ResidentModel, resident_id)
        if user is None or resident is None:
            msg = f"Cannot assign user {user_id} to resident {resident_id}"
            raise ValueError(msg)
        if resident not in user.residents:
            user.residents.append(resident)
        self.session.add(user)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email = user.email
        model.mobile_number = user.mobile_number
        model.push_token = user.push_token
        model.user_type = user.user_type or ""

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            mobile_number=model.mobile_number,
            push_token=model.push_token,
            user_type=model.user_type or "",
        )


__all__ = ["UserRepository"]
