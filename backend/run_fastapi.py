"""
Main entry point for the FastAPI application.
Run this file to start the FastAPI server.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn dmchat.fastapi_app:app --host 0.0.0.0 --port 3000 --reload

Before the first start, generate the Prisma client and create the schema:
    prisma generate && prisma db push
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import uvicorn

from dmchat.config.settings import get_config

if __name__ == "__main__":
    env = os.getenv("APP_ENV", "development")
    Config = get_config(env)
    debug = Config.DEBUG

    print(f"Starting FastAPI application in {env} mode...")
    print(f"Server running on http://{Config.HOST}:{Config.PORT}")
    print(f"API docs available at http://{Config.HOST}:{Config.PORT}/docs")

    uvicorn.run(
        "dmchat.fastapi_app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )
