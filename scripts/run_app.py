#!/usr/bin/env python
"""
Run the Streamlit listing workspace.

Usage:
    python scripts/run_app.py [--port 8501]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the SellerPro Streamlit UI")
    parser.add_argument('--port', type=int, default=8501, help="Port for the Streamlit server")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'seller_pro' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: UI module not found at {ui_path}")
        sys.exit(1)

    if not os.getenv('OPENAI_API_KEY') and not (project_root / '.env').exists():
        print("WARNING: OPENAI_API_KEY not set - AI content generation will be disabled")

    cmd = [sys.executable, '-m', 'streamlit', 'run', str(ui_path), '--server.port', str(args.port)]
    print(f"Starting Streamlit: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, cwd=str(project_root))
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
