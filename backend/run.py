"""Run the record API and the front end side by side.

Both FastAPI apps are served by uvicorn in one process. Host and port
come from `API_HOST`/`API_PORT` (default 0.0.0.0:8080) and
`FRONTEND_HOST`/`FRONTEND_PORT` (default 0.0.0.0:8000). Point the front
end at the API with `STUDENT_API_BASE_URL`, e.g.
`STUDENT_API_BASE_URL=http://localhost:8080/ python run.py`.
"""
import asyncio
import logging
import os
from uvicorn import Config, Server

from student_records.config import settings
from student_records.main import app as api_app
from student_records.frontend.main import app as frontend_app


async def serve(app, host_var: str, port_var: str, default_port: int) -> None:
    host = os.getenv(host_var, "0.0.0.0")
    port = int(os.getenv(port_var, str(default_port)))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.LOG_LEVEL.lower())
    await Server(config).serve()


async def main() -> None:
    """Run both services concurrently; stop both if either fails."""
    logging.basicConfig(level=settings.LOG_LEVEL)
    tasks = [
        asyncio.create_task(serve(api_app, "API_HOST", "API_PORT", 8080)),
        asyncio.create_task(serve(frontend_app, "FRONTEND_HOST", "FRONTEND_PORT", 8000)),
    ]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    for task in done:
        if exception := task.exception():
            logging.exception("Exception in service", exc_info=exception)
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
