"""WeinBlog server control script.

Usage:
    weinblog-server start [--port PORT] [--reload]
    weinblog-server stop
    weinblog-server restart [--port PORT]
    weinblog-server status
"""

import argparse
import json
import os
import signal
import subprocess
import sys
import time
import urllib.request
from pathlib import Path

from weinblog.config import settings

APP_PATH = "weinblog.main:app"


def data_dir() -> Path:
    return settings.data_dir


def pid_file() -> Path:
    return data_dir() / "weinblog.pid"


def log_file() -> Path:
    return data_dir() / "weinblog.log"


def get_pid() -> int | None:
    """Get the PID of the running server, if any."""
    path = pid_file()
    if not path.exists():
        return None

    try:
        pid = int(path.read_text().strip())
        # Check if process is actually running
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        # Stale PID file
        path.unlink(missing_ok=True)
        return None


def find_running_server() -> int | None:
    """Find any running weinblog uvicorn process."""
    try:
        result = subprocess.run(
            ["pgrep", "-f", f"uvicorn {APP_PATH}"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return None

    if result.returncode == 0 and result.stdout.strip():
        return int(result.stdout.strip().split()[0])
    return None


def start_server(
    port: int,
    host: str,
    reload: bool = False,
    foreground: bool = False,
    workers: int | None = None,
) -> bool:
    """Start the WeinBlog server.

    Args:
        port: Port to bind to
        host: Host to bind to
        reload: Enable auto-reload for development
        foreground: Run in foreground (blocking)
        workers: Uvicorn worker processes (default: configured value)

    Returns:
        True if server started successfully
    """
    pid = get_pid() or find_running_server()
    if pid:
        print(f"Server is already running (PID: {pid})")
        return False

    data_dir().mkdir(parents=True, exist_ok=True)

    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    else:
        # uvicorn ignores --workers together with --reload
        cmd.extend(["--workers", str(workers or settings.workers)])

    print(f"Starting WeinBlog server on http://{host}:{port}")

    if foreground:
        print("Press Ctrl+C to stop the server")
        try:
            subprocess.run(cmd)
        except KeyboardInterrupt:
            print("\nServer stopped")
        return True

    with open(log_file(), "w") as log:
        process = subprocess.Popen(
            cmd,
            stdout=log,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )

    time.sleep(1)
    if process.poll() is None:
        pid_file().write_text(str(process.pid))
        print(f"Server started with PID: {process.pid}")
        print(f"Logs available at: {log_file()}")
        return True

    print("Failed to start server. Check logs for details.")
    return False


def stop_server() -> bool:
    """Stop the WeinBlog server.

    Returns:
        True if server was stopped
    """
    pid = get_pid() or find_running_server()
    if not pid:
        print("Server is not running")
        return False

    print(f"Stopping server (PID: {pid})...")

    try:
        os.kill(pid, signal.SIGTERM)

        for _ in range(10):
            time.sleep(0.5)
            try:
                os.kill(pid, 0)
            except ProcessLookupError:
                break
        else:
            print("Server didn't stop gracefully, forcing...")
            os.kill(pid, signal.SIGKILL)

        print("Server stopped")
        pid_file().unlink(missing_ok=True)
        return True

    except ProcessLookupError:
        print("Server was not running")
        pid_file().unlink(missing_ok=True)
        return False
    except PermissionError:
        print(f"Permission denied to stop process {pid}")
        return False


def restart_server(port: int, host: str) -> bool:
    """Restart the WeinBlog server."""
    print("Restarting WeinBlog server...")
    stop_server()
    time.sleep(1)
    return start_server(port=port, host=host)


def server_status(port: int) -> None:
    """Print the server status."""
    pid = get_pid() or find_running_server()
    if not pid:
        print("WeinBlog server is not running")
        return

    print(f"WeinBlog server is running (PID: {pid})")
    try:
        with urllib.request.urlopen(f"http://localhost:{port}/health", timeout=2) as response:
            data = json.loads(response.read().decode())
    except (OSError, ValueError):
        print("  (Could not fetch health status)")
        return

    print(f"  Status: {data.get('status', 'unknown')}")
    print(f"  Version: {data.get('version', 'unknown')}")
    print(f"  Wines: {data.get('wines', 'unknown')}")


def _add_bind_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})",
    )


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="WeinBlog server control script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s start                  Start server on the configured port
  %(prog)s start --port 8080      Start server on port 8080
  %(prog)s start --reload         Start with auto-reload for development
  %(prog)s start --foreground     Start in foreground (blocking)
  %(prog)s stop                   Stop the server
  %(prog)s restart                Restart the server
  %(prog)s status                 Check server status
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Start the server")
    _add_bind_arguments(start_parser)
    start_parser.add_argument(
        "--reload", "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    start_parser.add_argument(
        "--foreground", "-f",
        action="store_true",
        help="Run in foreground (blocking)",
    )
    start_parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help=f"Worker processes, ignored with --reload (default: {settings.workers})",
    )

    subparsers.add_parser("stop", help="Stop the server")

    restart_parser = subparsers.add_parser("restart", help="Restart the server")
    _add_bind_arguments(restart_parser)

    status_parser = subparsers.add_parser("status", help="Check server status")
    status_parser.add_argument("--port", "-p", type=int, default=settings.port)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "start":
            success = start_server(
                port=args.port,
                host=args.host,
                reload=args.reload,
                foreground=args.foreground,
                workers=args.workers,
            )
            return 0 if success else 1

        elif args.command == "stop":
            return 0 if stop_server() else 1

        elif args.command == "restart":
            return 0 if restart_server(port=args.port, host=args.host) else 1

        elif args.command == "status":
            server_status(args.port)
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
