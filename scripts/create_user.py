import argparse
import asyncio

from embodied_journal.db.database import AsyncSessionLocal
from embodied_journal.services.users import UserExistsError, create_user


async def main(email: str, token: str | None) -> None:
    async with AsyncSessionLocal() as session:
        try:
            user = await create_user(session, email=email, api_token=token)
        except UserExistsError as exc:
            raise SystemExit(str(exc))

    print("User id:  ", user.id)
    print("API token:", user.api_token)
    print("Send it as: Authorization: Bearer <token>")


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Create a journal user and print its API token")
    p.add_argument("--email", "-e", required=True, help="Login email")
    p.add_argument("--token", "-t", default=None, help="Use this API token instead of a generated one")
    args = p.parse_args()

    asyncio.run(main(args.email, args.token))
