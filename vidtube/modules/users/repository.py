from sqlalchemy import select, or_
from vidtube.core.repository import Repository
from vidtube.modules.users.models import User

class UserRepository(Repository[User]):
    model = User
    label = "User"

    async def get_by_username(self, username: str) -> User | None:
        res = await self.session.execute(select(User).where(User.username == username.lower()))
        return res.scalar_one_or_none()

    async def get_by_login(self, identifier: str) -> User | None:
        ident = identifier.strip().lower()
        q = select(User).where(or_(User.username == ident, User.email == ident))
        res = await self.session.execute(q)
        return res.scalars().first()

    async def exists_with(self, *, username: str, email: str) -> bool:
        q = select(User.id).where(or_(User.username == username.lower(), User.email == email.lower()))
        res = await self.session.execute(q)
        return res.first() is not None
