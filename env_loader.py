"""Merkezi .env yukleyici. chat.py ve MCP sunucusu bunu import eder.

Proje kokundeki .env dosyasindan STOCK_STORE (dynamodb | memory), STOCK_TABLE,
STOCK_CACHE_DIR ve AWS kimlik bilgilerini okur. Ortamda zaten tanimli
degerler ezilmez. AWS_DEFAULT_REGION verilmezse us-west-2 kullanilir.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Proje kokundeki .env dosyasini bul ve yukle
_env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(_env_path, override=False)

os.environ.setdefault("AWS_DEFAULT_REGION", "us-west-2")
