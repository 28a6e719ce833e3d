from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.schemas import UserRecord
from storefront.repos.base import UserRepo


def _to_domain(row: UserModel) -> UserRecord:
    return UserRecord(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlUserRepo(UserRepo):
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> UserRecord | None:
        row = self.db.get(UserModel, user_id)
        return _to_domain(row) if row else None

    def get_by_email(self, email: str) -> UserRecord | None:
        row = self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()
        return _to_domain(row) if row else None

    def put(self, user: UserRecord) -> UserRecord:
        self.db.merge(
            UserModel(
                id=user.id,
                email=user.email,
                name=user.name,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
        )
        self.db.commit()
        return user
