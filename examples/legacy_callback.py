from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict

from callbackify import Rejection, UnhandledFailureReporter, callbackify


USERS: Dict[int, str] = {1: "alice", 2: "bob"}


async def fetch_user(user_id: int) -> str:
    await asyncio.sleep(0.01)
    if user_id not in USERS:
        # 0 件は falsy なので FalsyValueRejectionError に包まれて届く
        raise Rejection(0)
    return USERS[user_id]


fetch_user_cb = callbackify(fetch_user)


def on_user(err: Any, name: Any = None) -> None:
    if err:
        print(f"[error] {err.name}: {err} (reason={err.reason!r})", file=sys.stderr)
        return
    print(f"user> {name}")


async def main() -> None:
    reporter = UnhandledFailureReporter()
    reporter.install()

    for user_id in (1, 2, 3):
        fetch_user_cb(user_id, on_user)

    await asyncio.sleep(0.1)
    reporter.uninstall()


if __name__ == "__main__":
    asyncio.run(main())
