"""Application entry point.

Run with ``flask --app authgate.main run`` or ``python -m authgate.main``.
"""

from .app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
