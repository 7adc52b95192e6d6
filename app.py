import os

from src.access_log.access_log.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        debug=app.config["DEBUG"],
        use_reloader=False,
    )
