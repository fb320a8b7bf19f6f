"""
Entrypoint for running the API in development.
In production run create_app() under a WSGI server (gunicorn) with threads.
"""
import os
from . import create_app

# APP_ENV selects the configuration (handled in get_config())
app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_RUN_PORT", "8000"))
    debug = os.getenv("FLASK_DEBUG", str(app.config.get("DEBUG", False))).lower() in ("1", "true", "yes")
    # threaded: each request is served on its own thread
    app.run(host=host, port=port, debug=debug, threaded=True)
