"""Admission gate bounding how many resumes are processed at once."""

import asyncio


class AdmissionGate:
    """Counting semaphore that also records how busy it got.

    Waiters are admitted in FIFO order. ``in_flight`` is decremented on exit
    whether or not the guarded block raised.

        gate = AdmissionGate(8)
        async with gate:
            ...
    """

    def __init__(self, limit: int = 8):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.in_flight = 0
        self.peak_in_flight = 0
        self.admitted = 0
        self._semaphore = asyncio.Semaphore(limit)

    async def __aenter__(self) -> "AdmissionGate":
        await self._semaphore.acquire()
        self.in_flight += 1
        self.admitted += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.in_flight -= 1
        self._semaphore.release()
