"""
Entry point for the User Records Backend
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config.settings import PORT, LOG_LEVEL
from app import create_app

# Configure logging
logging.basicConfig(level=LOG_LEVEL, force=True)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User Records Backend on port {PORT}")
    uvicorn.run(create_app(), host="0.0.0.0", port=PORT)
