"""
Serverless entry point for the Complaint Desk API
"""
import sys
import os

# Add parent directory to path
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

os.environ.setdefault("ENVIRONMENT", "production")

from mangum import Mangum
from src.config import settings
from src.main import app, check_production_settings

# Lifespan is disabled, so run the startup check here; the database engine
# initializes on first use and tables are created by the seed script or migrations
check_production_settings(settings)

handler = Mangum(app, lifespan="off")
