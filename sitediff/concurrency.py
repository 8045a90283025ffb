"""Fan-out helpers shared by hashing, beautifying and diff rendering."""

import asyncio


async def gather_bounded(aws, max_concurrency=None):
    """Await every awaitable and return their results in input order.

    With ``max_concurrency`` unset everything runs at once; otherwise a
    semaphore caps how many are in flight. The first failure propagates.
    """
    aws = list(aws)
    if not max_concurrency:
        return await asyncio.gather(*aws)

    semaphore = asyncio.Semaphore(max_concurrency)

    async def limited(aw):
        async with semaphore:
            return await aw

    return await asyncio.gather(*(limited(aw) for aw in aws))
