# app/main.py
import uvicorn

from app.api import create_app
from app.utils.settings import PORT

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
