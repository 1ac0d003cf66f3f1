import json
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from typing import Any, AsyncIterator, Dict

from omni_console.const import CACHE_CONTROL_NO_CACHE, HTTP_BAD_REQUEST, HTTP_CONFLICT, STREAMING_MEDIA_TYPE
from omni_console.shared.logging import LoggingManager

ALREADY_RUNNING_MESSAGE = "A speed test is already running"


class SpeedTestRouter:
    """Router for the endpoint speed test."""

    def __init__(self, state):
        self.state = state
        self.logger = LoggingManager.get_logger(__name__)
        self.router = APIRouter(prefix="/api/speedtest", tags=["speedtest"])
        self.router.post("")(self.start)
        self.router.get("/summary")(self.summary)

    @classmethod
    def get_router(cls, state) -> APIRouter:
        """Get the router instance."""
        return cls(state).router

    async def _stream(self) -> AsyncIterator[bytes]:
        # The run is claimed on the first read of the body, never before
        if self.state.speed_test_running:
            yield (json.dumps({"status": "error", "errorMsg": ALREADY_RUNNING_MESSAGE}) + "\n").encode("utf-8")
            return
        self.state.speed_test_running = True
        run = self.state.speed_test.iter_run(self.state.catalog.models, self.state.settings)
        try:
            async for snapshot in run:
                yield (json.dumps(snapshot.to_dict()) + "\n").encode("utf-8")
        finally:
            await run.aclose()
            self.state.speed_test_running = False

    async def start(self) -> StreamingResponse:
        """Run the speed test, streaming every result transition as one NDJSON line."""
        if self.state.speed_test_running:
            raise HTTPException(status_code=HTTP_CONFLICT, detail=ALREADY_RUNNING_MESSAGE)
        if len(self.state.catalog) == 0:
            raise HTTPException(status_code=HTTP_BAD_REQUEST, detail="No models configured yet.")

        self.logger.info("Speed test requested")
        return StreamingResponse(self._stream(), media_type=STREAMING_MEDIA_TYPE, headers={
            "Cache-Control": CACHE_CONTROL_NO_CACHE,
            "X-Accel-Buffering": "no",
        })

    async def summary(self) -> Dict[str, Any]:
        """Per-model results and summary statistics of the last run."""
        stats = self.state.speed_stats()
        return {
            "results": [r.to_dict() for r in self.state.speed_test.last_results],
            "stats": stats.to_dict() if stats else None,
        }
