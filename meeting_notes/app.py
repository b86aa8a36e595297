import uvicorn

from meeting_notes.api import Application, create_app

application: Application = create_app()
app = application.app


def main() -> None:
    uvicorn.run(app, host=application.settings.HOST, port=application.settings.PORT)


if __name__ == "__main__":
    main()
