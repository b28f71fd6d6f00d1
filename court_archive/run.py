#!/usr/bin/env python3
"""
Запуск сервера архива

Usage:
    python -m court_archive.run
"""

import uvicorn

if __name__ == "__main__":
    print("Starting Court Archive...")
    print("API docs: http://localhost:8000/docs")
    print("Health:   http://localhost:8000/api/health")
    print()

    # in-memory хранилище живет в одном процессе, поэтому без reload
    uvicorn.run(
        "court_archive.main:app",
        host="0.0.0.0",
        port=8000
    )
