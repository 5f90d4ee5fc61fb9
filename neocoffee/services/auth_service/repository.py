from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Admin


class AdminRepository:

    @staticmethod
    async def save(db: AsyncSession, admin: Admin) -> Admin:
        db.add(admin)
        await db.commit()
        await db.refresh(admin)
        return admin

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> Optional[Admin]:
        result = await db.execute(select(Admin).where(Admin.felhasznalonev == username))
        return result.scalars().first()
