#!/usr/bin/env python3
"""
Startup script for container deployments.
Runs migrations, creates the admin if configured, then starts uvicorn.
"""

import os
import subprocess
import sys


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return success status."""
    print(f"\n=== {description} ===")
    try:
        subprocess.run(cmd, check=True)
        return True
    except subprocess.CalledProcessError as e:
        print(f"Warning: {description} failed with code {e.returncode}")
        return False


def main():
    print("\n" + "=" * 50)
    print("Control Panel Startup Script")
    print("=" * 50)

    run_command(["alembic", "upgrade", "head"], "Running database migrations")

    # Create the admin if environment variables are set
    email = os.environ.get("ADMIN_EMAIL", "").strip()
    password = os.environ.get("ADMIN_PASSWORD", "").strip()

    if email and password:
        result = subprocess.run([
            sys.executable, "scripts/create_admin.py",
            "--email", email,
            "--password", password,
            "--first-name", os.environ.get("ADMIN_FIRST_NAME", "").strip(),
            "--last-name", os.environ.get("ADMIN_LAST_NAME", "").strip(),
        ])
        # Don't fail if the admin already exists
        if result.returncode != 0:
            print("Note: admin creation returned non-zero (may already exist)")
    else:
        print("\nSkipping admin creation (ADMIN_EMAIL/ADMIN_PASSWORD not set)")

    port = os.environ.get("PORT", "8000")
    print(f"\n=== Starting uvicorn on port {port} ===\n")

    os.execvp("uvicorn", [
        "uvicorn",
        "controlpanel.main:app",
        "--host", "0.0.0.0",
        "--port", port,
    ])


if __name__ == "__main__":
    main()
