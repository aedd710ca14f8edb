from __future__ import annotations

import argparse

import uvicorn

from cep_weather.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run one of the CEP weather services")
    parser.add_argument("service", choices=["gateway", "resolver"], help="Which service to start")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (defaults to GATEWAY_PORT / RESOLVER_PORT)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    args = parser.parse_args()

    default_port = settings.gateway_port if args.service == "gateway" else settings.resolver_port
    uvicorn.run(
        f"cep_weather.main:create_{args.service}_app",
        factory=True,
        host=args.host,
        port=args.port or default_port,
        reload=bool(args.reload),
        log_config=None,
    )


if __name__ == "__main__":
    main()
