#!/usr/bin/env python3
"""
Almacen management CLI.

Usage:
    python manage.py start       Start the ledger API in the background
    python manage.py stop        Stop the background server
    python manage.py restart     Stop + start
    python manage.py dev         Run the API in the foreground with reload
    python manage.py status      Check if the server is running
    python manage.py migrate     Apply pending database migrations
"""

import argparse
import asyncio
import os
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".almacen.pid"
APP_PATH = "almacen.api.main:app"


def _is_pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _read_pid() -> int | None:
    """Read the PID file, dropping it when the process is gone."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_port_free(port: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def _stop_pid(pid: int, timeout: float = 3.0) -> bool:
    """SIGTERM the process and wait for it to exit."""
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError:
        return not _is_pid_alive(pid)
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not _is_pid_alive(pid):
            return True
        time.sleep(0.1)
    return False


def _uvicorn_cmd(args: argparse.Namespace, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", args.host,
        "--port", str(args.port),
    ]
    if reload:
        cmd.append("--reload")
    elif getattr(args, "workers", 1) > 1:
        cmd += ["--workers", str(args.workers)]
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Start the server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        print(f"Error: Port {args.port} is already in use.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    proc = subprocess.Popen(_uvicorn_cmd(args), cwd=str(ROOT_DIR))
    PID_FILE.write_text(str(proc.pid))

    print(f"Server started (PID {proc.pid}).")
    print(f"  Health:   http://{args.host}:{args.port}/api/health")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    stopped = _stop_pid(pid)
    PID_FILE.unlink(missing_ok=True)
    if stopped:
        print("Server stopped.")
    else:
        print("Warning: Server may still be running.")


def cmd_restart(args: argparse.Namespace) -> None:
    cmd_stop(args)
    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    """Run uvicorn in the foreground with auto-reload."""
    try:
        subprocess.run(_uvicorn_cmd(args, reload=True), cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nDev server stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(args.port):
        print(f"No PID file, but port {args.port} is in use.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations to the configured database."""
    from almacen.infrastructure.storage.sqlite.migrations import run_migrations

    db_path = Path(args.db_path) if args.db_path else None
    results = asyncio.run(run_migrations(db_path, create_backup_before=not args.no_backup))

    if not results:
        print("Database is up to date.")
        return
    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  {result.version}: {state}")
    if not all(r.success for r in results):
        sys.exit(1)


def _add_server_args(p: argparse.ArgumentParser, workers: bool = False) -> None:
    p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    if workers:
        p.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Almacen management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_start = sub.add_parser("start", help="Start the server")
    _add_server_args(p_start, workers=True)
    p_start.set_defaults(func=cmd_start)

    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    p_restart = sub.add_parser("restart", help="Restart the server")
    _add_server_args(p_restart, workers=True)
    p_restart.set_defaults(func=cmd_restart)

    p_dev = sub.add_parser("dev", help="Run with auto-reload")
    _add_server_args(p_dev)
    p_dev.set_defaults(func=cmd_dev)

    p_status = sub.add_parser("status", help="Check if the server is running")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    p_migrate = sub.add_parser("migrate", help="Apply database migrations")
    p_migrate.add_argument("--db-path", help="Database file (default from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
