# config.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/smart_campus.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "1") == "1"
