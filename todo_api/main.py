import uvicorn

from todo_api.app import create_app
from todo_api.config import Settings
from todo_api.logging_config import configure_logging

settings = Settings.from_env()
configure_logging(settings.log_level)

app = create_app(settings)


def run():
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
