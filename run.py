"""Standalone FastAPI server entry point.

Run with: python run.py
"""
import logging
import os

import uvicorn
from dotenv import load_dotenv

# Configure logging to show generation progress
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

if __name__ == "__main__":
    load_dotenv()
    uvicorn.run(
        "fluxstudio.fastapi_app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "7860")),
        reload=True,
    )
