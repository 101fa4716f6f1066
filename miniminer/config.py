import os

from dotenv import load_dotenv

load_dotenv()

HA_DOMAIN = os.getenv("HA_DOMAIN", "")
HA_TOKEN = os.getenv("HA_TOKEN", "")
