#!/usr/bin/env python
"""
Run the Purchase Tool API (FastAPI under uvicorn).

Usage:
    PURCHASE_TOOL_CATALOG_URL=https://emerald.example.com/emerald_api python scripts/run_api.py
"""
import os
import subprocess
import sys
from pathlib import Path


def main():
    project_root = Path(__file__).parent.parent

    # Ensure src is in python path
    env = os.environ.copy()
    src_path = str(project_root / "src")
    if "PYTHONPATH" in env:
        env["PYTHONPATH"] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = src_path

    if not env.get("PURCHASE_TOOL_CATALOG_URL"):
        print("WARNING: PURCHASE_TOOL_CATALOG_URL is not set; catalog endpoints will return 503")

    print("Starting Purchase Tool API (FastAPI)...")
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "purchase_tool.api.main:app",
            "--host", "0.0.0.0",
            "--port", "8000",
            "--reload"
        ], cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
