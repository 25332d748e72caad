"""CLI entry point for launching the FastAPI app with uvicorn."""

import uvicorn

from .dependencies import config


def main() -> None:
    """Run the server with host/port taken from the app config."""
    uvicorn.run(
        "src.server.app:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        reload_dirs=["src"] if config.server.reload else None,
    )


if __name__ == "__main__":
    main()
