"""Storage layer for users and admin grants"""

from sqlalchemy.ext.asyncio import AsyncSession

from models.user import Admin, User


class UserStore:
    """Data access for users, custom claims and the admins table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user(self, uid: str) -> User | None:
        return await self.session.get(User, uid)

    async def is_admin(self, uid: str) -> bool:
        return await self.session.get(Admin, uid) is not None

    async def add_admin(self, uid: str) -> Admin:
        admin = await self.session.get(Admin, uid)
        if admin is None:
            admin = Admin(uid=uid)
            self.session.add(admin)
            await self.session.commit()
        return admin

    async def set_custom_claims(self, uid: str, **claims) -> User:
        """Merge claims into the user's custom claims, creating the user row if needed."""
        user = await self.session.get(User, uid)
        if user is None:
            user = User(uid=uid, custom_claims={})
            self.session.add(user)
        user.custom_claims = {**(user.custom_claims or {}), **claims}
        await self.session.commit()
        return user
