# reporter の subscriber に continuation の例外がそのまま届くことを確認する
import asyncio
import logging

from callbackify import Rejection, UnhandledFailureReporter, callbackify

sentinel = RuntimeError(__file__)


async def fn():
    raise Rejection(sentinel)


async def main():
    reporter = UnhandledFailureReporter()
    _, q = reporter.subscribe()
    reporter.install()

    def cb(err, ret=None):
        raise RuntimeError(f"look for this in output: {err}")

    callbackify(fn)(cb)
    await asyncio.sleep(0.05)
    reporter.uninstall()

    failure = q.get_nowait()
    assert failure.exception is not sentinel
    # stdout で err の中身を確認する
    print(failure.exception)


logging.basicConfig(level=logging.CRITICAL)
asyncio.run(main())
