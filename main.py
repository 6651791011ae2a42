"""
Entry point for the User API backend
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

# Configure logging before any userapi module logs at import
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from userapi.config.settings import PORT, ENV
from userapi.app import app

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User API on port {PORT} ({ENV} mode)")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
