"""Application entry point for the BasicAuth server."""

import uvicorn

from basicauth.app import App
from basicauth.config import Config
from basicauth.logging import setup_logging
from basicauth.web.server import create_fastapi_app


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    fastapi_app = create_fastapi_app(App(config), config)

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,  # keep the handlers installed by setup_logging
        # Behind a TLS-terminating proxy the Secure session cookie needs the forwarded scheme
        proxy_headers=True,
        forwarded_allow_ips=config.forwarded_allow_ips,
        server_header=False,
    )


if __name__ == "__main__":
    main()
