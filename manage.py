#!/usr/bin/env python3
"""
Medication reminder management CLI.

Usage:
    python manage.py start       Start the server in the background
    python manage.py stop        Graceful shutdown
    python manage.py restart     Stop + start
    python manage.py dev         Run in the foreground with auto-reload
    python manage.py status      Check if server is running
    python manage.py migrate     Apply pending database migrations

The server always runs a single worker: the alarm slot and the tick loop
live in process memory, and two workers would ring every reminder twice.
"""

import argparse
import os
import platform
import re
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".medreminder.pid"

IS_WINDOWS = platform.system() == "Windows"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _read_pid() -> int | None:
    """Read PID from the PID file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    # Stale PID file
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    """Check if a process with the given PID is running."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
            return str(pid) in result.stdout
        except OSError:
            return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _kill_pid(pid: int) -> bool:
    """Ask a process to terminate. SIGTERM lets uvicorn run the shutdown hooks."""
    if IS_WINDOWS:
        try:
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
            return True
        except OSError:
            return False
    try:
        os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _wait_for_exit(pid: int, timeout: float = 5.0) -> bool:
    """Poll until the process exits. Returns True if it did."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not _is_pid_alive(pid):
            return True
        time.sleep(0.1)
    return not _is_pid_alive(pid)


def _find_pid_on_port(port: int) -> int | None:
    """Find the PID of the process listening on the given port."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["netstat", "-ano", "-p", "TCP"],
                capture_output=True,
                text=True,
            )
        except OSError:
            return None
        for line in result.stdout.splitlines():
            if f":{port}" in line and "LISTENING" in line:
                try:
                    return int(line.split()[-1])
                except (ValueError, IndexError):
                    continue
        return None

    try:
        result = subprocess.run(
            ["lsof", "-ti", f"TCP:{port}", "-sTCP:LISTEN"],
            capture_output=True,
            text=True,
        )
        if result.returncode == 0 and result.stdout.strip():
            return int(result.stdout.strip().splitlines()[0])
    except (OSError, ValueError):
        pass
    try:
        result = subprocess.run(
            ["ss", "-tlnp", f"sport = :{port}"],
            capture_output=True,
            text=True,
        )
        match = re.search(r"pid=(\d+)", result.stdout)
        if match:
            return int(match.group(1))
    except (OSError, ValueError):
        pass
    return None


def _is_port_free(host: str, port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((host, port))
        return True
    except OSError:
        return False


def _uvicorn_cmd(host: str, port: int, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", host,
        "--port", str(port),
        "--workers", "1",
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Start the server in the background and record its PID."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.host, args.port):
        holder = _find_pid_on_port(args.port)
        owner = f"PID {holder}" if holder is not None else "an unknown process"
        print(f"Error: Port {args.port} is held by {owner}.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")

    popen_kwargs: dict = {"cwd": str(ROOT_DIR)}
    if IS_WINDOWS:
        popen_kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP
    proc = subprocess.Popen(_uvicorn_cmd(args.host, args.port), **popen_kwargs)

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}/api/reminders")
    print(f"  Alarm:    http://{args.host}:{args.port}/api/alarm")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()

    if pid is None:
        pid = _find_pid_on_port(args.port)
        if pid is None:
            print("Server is not running.")
            return
        print(f"No PID file found. Detected server on port {args.port} (PID {pid}).")

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid) and not _wait_for_exit(pid):
        print("Warning: Process did not exit within 5 seconds.")

    PID_FILE.unlink(missing_ok=True)
    if not _is_pid_alive(pid):
        print("Server stopped.")
    else:
        print("Warning: Server may still be running.")


def cmd_restart(args: argparse.Namespace) -> None:
    """Stop then start the server."""
    pid = _read_pid()
    if pid is not None:
        print(f"Stopping server (PID {pid})...")
        _kill_pid(pid)
        _wait_for_exit(pid)
        PID_FILE.unlink(missing_ok=True)
        print("Server stopped.")

    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the server in the foreground with auto-reload."""
    print(f"Starting server on {args.host}:{args.port} (reload mode)...")
    try:
        subprocess.run(_uvicorn_cmd(args.host, args.port, reload=True), cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()

    if pid is not None:
        print(f"Server is running (PID {pid}).")
        return

    port_pid = _find_pid_on_port(args.port)
    if port_pid is not None:
        print(f"No PID file, but port {args.port} is held by PID {port_pid}.")
        print("  This may be a stale server. Use 'stop' to clean up.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations to the configured database."""
    import asyncio

    from src.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database())
    if not results:
        print("Database is up to date.")
    for result in results:
        state = "SUCCESS" if result.success else "FAILED"
        print(f"[{state}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
    if any(not r.success for r in results):
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Medication reminder management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func, help_text in (
        ("start", cmd_start, "Start the server"),
        ("restart", cmd_restart, "Restart the server"),
        ("dev", cmd_dev, "Run in the foreground with auto-reload"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--host", default=DEFAULT_HOST, help=f"Bind host (default: {DEFAULT_HOST})")
        p.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Bind port (default: {DEFAULT_PORT})")
        p.set_defaults(func=func)

    for name, func, help_text in (
        ("stop", cmd_stop, "Stop the server"),
        ("status", cmd_status, "Check if server is running"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port to check (default: {DEFAULT_PORT})")
        p.set_defaults(func=func)

    p_migrate = sub.add_parser("migrate", help="Apply pending database migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
