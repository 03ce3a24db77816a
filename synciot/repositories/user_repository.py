from typing import Optional

from synciot.models.Users import User
from synciot.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self):
        super().__init__(User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.session.query(User).filter(User.email == email).first()
