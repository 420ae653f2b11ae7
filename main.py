"""
Entrypoint: load config, init logging, fetch one document and print it as JSON
"""

import argparse
import json
import sys

import structlog
from dotenv import load_dotenv

from jsonld_loader.config import Config, build_client
from jsonld_loader.errors import LoadError
from jsonld_loader.logs import configure_logging
from jsonld_loader.options import LoaderOptions
from jsonld_loader.router import SchemeRouter


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Retrieve a remote JSON-LD document")
    parser.add_argument('uri', help="http(s) or file URI of the document")
    parser.add_argument('--profile', action='append', default=[],
                        help="profile to request via the Accept header, repeatable")
    parser.add_argument('--max-redirections', type=int, default=None,
                        help="redirects to follow before failing, 0 for no limit")
    parser.add_argument('--config', default=None, help="path to a config.yaml")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Load the requested document and write the summary to stdout"""
    args = parse_args(argv)

    # Load environment variables from .env file
    load_dotenv()
    config = Config(args.config)

    configure_logging(
        level=config.logging.get('level', 'INFO'),
        format=config.logging.get('format', 'json')
    )
    logger = structlog.get_logger(__name__)

    max_redirections = args.max_redirections
    if max_redirections is None:
        max_redirections = config.loader.get('max_redirections', 10)

    client = build_client(config)
    router = SchemeRouter.default(client=client, max_redirections=max_redirections)
    try:
        document = router.load_document(args.uri, LoaderOptions(request_profile=args.profile))
    except LoadError as e:
        logger.error("load_failed", uri=args.uri, code=e.code.name, error=str(e))
        return 1
    finally:
        router.close()
        client.close()

    if document is None:
        logger.warning("empty_document", uri=args.uri)
        print(json.dumps(None))
        return 0

    print(json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
