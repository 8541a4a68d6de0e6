# backend/medcart/config.py
import os

DATABASE_URL = os.getenv("MEDCART_DATABASE_URL", "sqlite:///./medcart.db")
LOG_LEVEL = os.getenv("MEDCART_LOG_LEVEL", "INFO")
SEED_ON_STARTUP = os.getenv("MEDCART_SEED_ON_STARTUP", "1").strip().lower() not in ("0", "false", "no")
CORS_ORIGINS = [o.strip() for o in os.getenv("MEDCART_CORS_ORIGINS", "*").split(",") if o.strip()]
