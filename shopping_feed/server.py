"""
Feed HTTP Endpoint

Serves the generated Merchant Center feed at GET /feed.

build_feed_response() holds the request logic and is independent
of the HTTP server so it can be reused behind any framework.
"""

import http.server
import json
import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from .common.config_loader import ConfigurationError, FeedSettings, load_settings
from .feed.generator import MerchantFeedGenerator

logger = logging.getLogger(__name__)

FEED_PATHS = ("/feed", "/api/feed")

CSV_CONTENT_TYPE = "text/csv; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


@dataclass
class FeedResponse:
    """Status, content type and body of a feed request."""
    status: int
    content_type: str
    body: str


def build_feed_response(
    environ: Optional[Mapping[str, str]] = None,
    config_file: str = 'feed_settings.yaml',
    generator_factory: Optional[Callable[[FeedSettings], MerchantFeedGenerator]] = None,
) -> FeedResponse:
    """
    Generate the feed and wrap the outcome in a response.

    Args:
        environ: Environment with Shopify credentials (default: os.environ)
        config_file: Feed settings YAML
        generator_factory: Builds the generator from settings
                           (default: MerchantFeedGenerator.from_settings)

    Returns:
        200 with the CSV document, or 500 with a JSON error (missing
        configuration) or the plain-text error message (any other failure)
    """
    if generator_factory is None:
        generator_factory = MerchantFeedGenerator.from_settings

    try:
        settings = load_settings(environ, config_file)
        with generator_factory(settings) as generator:
            document = generator.generate()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return FeedResponse(500, JSON_CONTENT_TYPE, json.dumps({"error": str(e)}))
    except Exception as e:
        logger.exception("Error generating Google Merchant feed")
        return FeedResponse(500, TEXT_CONTENT_TYPE, str(e))

    return FeedResponse(200, CSV_CONTENT_TYPE, document)


class FeedRequestHandler(http.server.BaseHTTPRequestHandler):
    """Handle GET requests for the feed."""

    environ: Optional[Mapping[str, str]] = None
    config_file = 'feed_settings.yaml'

    def do_GET(self):
        """Handle GET request (feed download)."""
        path = self.path.split("?", 1)[0].rstrip("/")

        if path in FEED_PATHS:
            response = build_feed_response(self.environ, self.config_file)
        else:
            response = FeedResponse(404, TEXT_CONTENT_TYPE, "Not Found")

        body = response.body.encode("utf-8")
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def serve(host: str = "127.0.0.1", port: int = 8000, config_file: str = 'feed_settings.yaml') -> None:
    """
    Serve the feed until interrupted.

    Each request runs its own independent feed generation.
    """
    handler = type("ConfiguredFeedHandler", (FeedRequestHandler,), {"config_file": config_file})

    with http.server.ThreadingHTTPServer((host, port), handler) as httpd:
        logger.info("Serving feed at http://%s:%d/feed", host, port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down")
