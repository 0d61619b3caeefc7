"""Create (or promote) the admin user from ADMIN_EMAIL / ADMIN_PASSWORD."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.database import async_session_maker, init_db
from app.services.auth_service import seed_admin


async def main() -> int:
    await init_db()
    async with async_session_maker() as db:
        user = await seed_admin(db)
        await db.commit()
    if not user:
        print("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1
    print(f"Admin user ready: {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
