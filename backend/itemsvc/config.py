import os

APP_NAME = "Item Service"
APP_VERSION = "0.1.0"

HOST = "0.0.0.0"
PORT = 80

JSON_CONTENT_TYPE = "application/json"

LOG_LEVEL = os.environ.get("ITEMSVC_LOG_LEVEL", "INFO").upper()
