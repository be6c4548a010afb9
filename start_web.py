#!/usr/bin/env python3
"""Start the DepPrep web application."""

import uvicorn

from core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    print("Starting DepPrep Web Application...")
    print(f"URL: http://localhost:{settings.web_port}")
    print(f"API docs: http://localhost:{settings.web_port}/docs")
    print("Press Ctrl+C to stop")
    print()

    uvicorn.run(
        "apps.web.main:app",
        host=settings.web_host,
        port=settings.web_port,
        reload=True,
        reload_dirs=["apps", "core"]
    )
