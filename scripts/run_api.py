#!/usr/bin/env python
"""
Run the SellerPro API with uvicorn.

Usage:
    python scripts/run_api.py [--host 0.0.0.0] [--port 8000] [--no-reload]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the SellerPro FastAPI server")
    parser.add_argument('--host', default="0.0.0.0")
    parser.add_argument('--port', type=int, default=8000)
    parser.add_argument('--no-reload', action='store_true', help="Disable auto-reload")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    os.chdir(project_root)

    # Ensure src is in python path
    env = os.environ.copy()
    src_path = str(project_root / "src")
    if "PYTHONPATH" in env:
        env["PYTHONPATH"] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = src_path

    cmd = [
        sys.executable, "-m", "uvicorn",
        "seller_pro.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if not args.no_reload:
        cmd.append("--reload")

    print(f"Starting SellerPro API on {args.host}:{args.port}...")
    try:
        subprocess.run(cmd, env=env)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
