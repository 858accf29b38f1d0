# telemetry.py
import os, sys, logging, warnings

APP_LOGGER = "venuecontract"

def configure_logging(level: str | None = None):
    """
    Configure logging for the service:
      - root logger at the configured level (VC_LOG_LEVEL, default INFO)
      - noisy 3rd-party loggers pushed down to WARNING
      - the "venuecontract" app logger writing to stdout
    Call once at startup, before the first request is served.
    """
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

    lvl_name = (level or os.getenv("VC_LOG_LEVEL", "INFO")).upper()
    lvl = getattr(logging, lvl_name, logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s - %(levelname)s - %(name)s: %(message)s",
        force=True,  # override prior handlers from libs
    )

    noisy = [
        # networking / http
        "urllib3", "httpx", "httpcore",
        # web server / form parsing
        "uvicorn.access", "multipart", "python_multipart",
        # yaml / asyncio chatter
        "asyncio",
    ]
    for name in noisy:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Route Python warnings (pydantic/fastapi deprecations) through logging
    logging.captureWarnings(True)
    warnings.simplefilter("default")

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(lvl)
    app_logger.propagate = False
    if not app_logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setLevel(lvl)
        h.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s: %(message)s"))
        app_logger.addHandler(h)
    return app_logger
