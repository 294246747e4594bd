"""
Run script to start the dashboard API server (no reload).
"""
import uvicorn
import os
import sys

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from aadhaar_dashboard.config import settings


def main():
    """Start the Uvicorn server."""
    base_url = f"http://{settings.HOST}:{settings.PORT}"
    print("Starting Aadhaar Analytics Dashboard API...")
    print(f"API Documentation: {base_url}/docs")
    print(f"ReDoc: {base_url}/redoc")
    print("-" * 50)

    uvicorn.run(
        "aadhaar_dashboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,  # Records live in process memory; a reload would drop them
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
