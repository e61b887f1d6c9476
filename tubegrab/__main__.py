"""Run the tubegrab server: ``python -m tubegrab``"""
import argparse

import uvicorn

from tubegrab.config.settings import config


def main():
    parser = argparse.ArgumentParser(description=config.api.description)
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=3000, help="Port to bind the server to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    print(f"Starting {config.api.title} v{config.api.version} on http://{args.host}:{args.port}")

    uvicorn.run(
        "tubegrab.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
