# tests/conftest.py
import os
import sys
import tempfile
from pathlib import Path

# Resolve backend/ folder and add it to sys.path
BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))

# Point the settings at a throwaway database before core.settings is imported
TEST_DATA_DIR = tempfile.mkdtemp(prefix="course-library-tests-")
os.environ["DATABASE_FOLDER"] = TEST_DATA_DIR
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DATA_DIR}/library.db"
os.environ["LOG_DIR"] = os.path.join(TEST_DATA_DIR, "logs")
os.environ["SEED_DATABASE"] = "false"
os.environ["RESET_DATABASE_ON_STARTUP"] = "false"
os.environ["API_VENDOR"] = "marvin"
