"""Invoke tasks for WeinBlog application management."""

import sys
from pathlib import Path

from invoke import task
from invoke.context import Context

# Must match weinblog.cli.server with the default data_dir
LOG_FILE = Path("data/weinblog.log")
SOURCE_URLS_FILE = Path("data/source_urls.json")


@task
def start(ctx: Context, host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the WeinBlog FastAPI server in the foreground.

    Args:
        ctx: Invoke context
        host: Host to bind to (default: 127.0.0.1)
        port: Port to bind to (default: 8000)
        reload: Enable auto-reload for development
    """
    cmd = f"uv run weinblog-server start --host {host} --port {port} --foreground"
    if reload:
        cmd += " --reload"

    try:
        ctx.run(cmd, pty=True)
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)


@task(name="start-background")
def start_background(ctx: Context, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Start the WeinBlog FastAPI server in the background."""
    ctx.run(f"uv run weinblog-server start --host {host} --port {port}")


@task
def stop(ctx: Context) -> None:
    """Stop the WeinBlog FastAPI server."""
    ctx.run("uv run weinblog-server stop")


@task
def restart(ctx: Context, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Restart the WeinBlog FastAPI server."""
    ctx.run(f"uv run weinblog-server restart --host {host} --port {port}")


@task
def status(ctx: Context) -> None:
    """Check the status of the WeinBlog server."""
    ctx.run("uv run weinblog-server status")


@task
def logs(ctx: Context, follow: bool = False, lines: int = 50) -> None:
    """View the WeinBlog server logs.

    Args:
        ctx: Invoke context
        follow: Follow log output (like tail -f)
        lines: Number of lines to show (default: 50)
    """
    if not LOG_FILE.exists():
        print("No log file found. Server may not have been started in background mode.")
        return

    if follow:
        ctx.run(f"tail -f {LOG_FILE}", pty=True)
    else:
        ctx.run(f"tail -n {lines} {LOG_FILE}")


@task
def match(ctx: Context, method: str, value: str, lang: str = "en") -> None:
    """Identify a wine without starting the server.

    Args:
        ctx: Invoke context
        method: code, name, url or text
        value: The code, query, URL or label text
        lang: en, de or zh
    """
    ctx.run(f"uv run weinblog-match --lang {lang} {method} '{value}'", warn=True)


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "uv run pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=weinblog --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context, all: bool = False) -> None:
    """Clean up temporary files.

    Args:
        ctx: Invoke context
        all: Also forget remembered source URLs
    """
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    for path in ["build", "dist", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    if all and SOURCE_URLS_FILE.exists():
        print(f"Removing {SOURCE_URLS_FILE}...")
        SOURCE_URLS_FILE.unlink()

    print("Cleanup complete")
