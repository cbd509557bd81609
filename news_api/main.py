"""ASGI entrypoint: uvicorn news_api.main:app"""

from dotenv import load_dotenv

load_dotenv()

from news_api.core.config import get_settings
from news_api.factory import create_app

app = create_app(get_settings())
