import uvicorn

from fine_appeal.api.app import create_app
from fine_appeal.config.settings import Settings
from fine_appeal.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level, settings.app_env)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
