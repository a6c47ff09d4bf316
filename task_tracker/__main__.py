"""Run the API server: ``python -m task_tracker`` or ``task-tracker``."""

import uvicorn

from task_tracker.config import get_settings
from task_tracker.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
