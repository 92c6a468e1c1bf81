#!/usr/bin/env python3
"""
Server management script.

Runs uvicorn with host/port from application settings and keeps a PID
file so a stale instance can be stopped before a new one starts.

Usage:
    python server.py start   # Start server (stops existing first, Ctrl+C to stop)
    python server.py stop    # Stop server
    python server.py status  # Check if running
"""

import os
import sys
import signal
import subprocess
import time
from pathlib import Path

from config import settings

PID_FILE = Path(__file__).parent / "server.pid"


def read_pid():
    """PID from the PID file, or None."""
    if not PID_FILE.exists():
        return None
    try:
        return int(PID_FILE.read_text().strip())
    except ValueError:
        PID_FILE.unlink()
        return None


def is_running(pid):
    """Check a process exists."""
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def stop_existing():
    """Stop the server recorded in the PID file."""
    pid = read_pid()
    if pid is None:
        return False

    stopped = False
    if is_running(pid):
        os.kill(pid, signal.SIGTERM)
        print(f"[OK] Stopped server (PID: {pid})")
        stopped = True
        time.sleep(1)
    PID_FILE.unlink(missing_ok=True)
    return stopped


def start_server():
    """Start the server in the foreground."""
    print("Starting server...")
    stop_existing()

    command = [
        sys.executable,
        "-m", "uvicorn",
        "main:app",
        "--host", settings.api_host,
        "--port", str(settings.api_port),
    ]
    if settings.debug:
        command.append("--reload")

    try:
        proc = subprocess.Popen(command, cwd=Path(__file__).parent)
    except FileNotFoundError:
        print("[ERROR] uvicorn not found!")
        print("   Install: pip install uvicorn")
        sys.exit(1)

    PID_FILE.write_text(str(proc.pid))
    print(f"[OK] Server started (PID: {proc.pid})")
    print(f"[OK] API: http://localhost:{settings.api_port}")
    print(f"[OK] Docs: http://localhost:{settings.api_port}/docs")
    print("\nPress Ctrl+C to stop")

    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
        print("[OK] Server stopped")
    finally:
        PID_FILE.unlink(missing_ok=True)


def show_status():
    """Show server status."""
    pid = read_pid()
    if pid is not None and is_running(pid):
        print(f"[OK] Server is running (PID: {pid})")
        print(f"     http://localhost:{settings.api_port}")
    else:
        print("[NOT RUNNING] Server is not running")
        print("              Start with: python server.py start")


def main():
    """Main entry point."""
    command = sys.argv[1] if len(sys.argv) > 1 else "start"

    if command == "start":
        start_server()
    elif command == "stop":
        if not stop_existing():
            print("[OK] No server running")
    elif command == "status":
        show_status()
    else:
        print("Usage: python server.py [start|stop|status]")
        sys.exit(1)


if __name__ == "__main__":
    main()
