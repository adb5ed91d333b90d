"""WSGI entry point for the Taskboard application."""

import os

from taskboard import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))

if __name__ == "__main__":
    app.run(port=int(os.getenv("PORT", "3000")))
