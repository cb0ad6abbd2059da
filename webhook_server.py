"""
Process entry point.

    uvicorn webhook_server:app --port 3000
    python webhook_server.py          # honours PORT / HOST from the environment
"""
import uvicorn

from zoom_receiver.config_loader import load_settings
from zoom_receiver.main import create_app

settings = load_settings()
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
