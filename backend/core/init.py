# core/init.py
import os

from core.db import get_sync_session, init_db, reset_db
from core.logger import get_logger
from core.seed import seed_database
from core.settings import settings

# export environment variables
DATABASE_FOLDER = settings.DATABASE_FOLDER
RESET_DATABASE_ON_STARTUP = settings.RESET_DATABASE_ON_STARTUP
SEED_DATABASE = settings.SEED_DATABASE

logger = get_logger(__name__)

def init_database_folder():
    if DATABASE_FOLDER and not os.path.exists(DATABASE_FOLDER):
        os.makedirs(DATABASE_FOLDER)

def init_schema():
    if RESET_DATABASE_ON_STARTUP:
        logger.info("Resetting database")
        reset_db()
    else:
        init_db()

def init_seed_data():
    if not SEED_DATABASE:
        return
    with get_sync_session() as session:
        seed_database(session)

def run_all():
    init_database_folder()
    init_schema()
    init_seed_data()
