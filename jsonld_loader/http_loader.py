"""
Retrieve remote JSON-LD documents over HTTP.

Follows redirect responses and ``alternate`` links to a JSON-LD
representation, and picks up a ``http://www.w3.org/ns/json-ld#context`` link
for plain JSON responses, before handing the body to a DocumentParser.
"""
from enum import Enum
from typing import Callable, Iterable, List, Optional

import httpx
import structlog

from . import media_type as mt
from .document import Document, DocumentParser
from .errors import ErrorCode, LoadError
from .link import Link, parse_link_header
from .loader import DocumentLoader
from .media_type import MediaType
from .options import LoaderOptions
from .uri import resolve

logger = structlog.get_logger(__name__)

REDIRECT_CODES = (301, 302, 303, 307)
CONTEXT_RELATION = 'http://www.w3.org/ns/json-ld#context'
ALTERNATE_RELATION = 'alternate'
DEFAULT_MAX_REDIRECTIONS = 10


def accept_header(profiles: Iterable[str] = None) -> str:
    """Build the Accept header preferring JSON-LD, then JSON, then anything."""
    value = str(mt.JSON_LD)
    if profiles:
        value += f';profile="{" ".join(sorted(profiles))}"'
    return f"{value},{mt.JSON};q=0.9,*/*;q=0.8"


class Transition(Enum):
    REDIRECT = "redirect"
    ALTERNATE = "alternate"
    DONE = "done"


class RetrievalState:
    """Mutable state of a single load_document call."""

    def __init__(self, target_uri: str):
        self.target_uri = target_uri
        self.redirection_count = 0
        self.content_type: Optional[MediaType] = None
        self.context_uri: Optional[str] = None

    def follow(self, target_uri: str, max_redirections: int):
        self.target_uri = target_uri
        self.redirection_count += 1
        if max_redirections > 0 and self.redirection_count >= max_redirections:
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, "Too many redirections")


def evaluate_response(
    state: RetrievalState,
    status_code: int,
    headers: httpx.Headers,
    max_redirections: int = DEFAULT_MAX_REDIRECTIONS
) -> Transition:
    """Decide what to do with a response and update ``state`` accordingly.

    Returns REDIRECT or ALTERNATE when another request to
    ``state.target_uri`` is needed, DONE when the response body is the
    document. Raises LoadError on terminal failures.
    """
    if status_code in REDIRECT_CODES:
        locations = headers.get_list('location')
        if not locations:
            raise LoadError(
                ErrorCode.LOADING_DOCUMENT_FAILED,
                f"Header location is required for code [{status_code}]."
            )
        state.follow(resolve(state.target_uri, locations[0]), max_redirections)
        return Transition.REDIRECT

    if status_code != 200:
        raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Unexpected response code [{status_code}]")

    # Each 200 response decides the content type on its own.
    content_types = headers.get_list('content-type')
    state.content_type = MediaType.of(content_types[0]) if content_types else None

    link_values = headers.get_list('link')
    if not link_values:
        return Transition.DONE

    links = _parse_links(link_values, state.target_uri)
    content_type = state.content_type

    if content_type is None or not (mt.JSON_LD.match(content_type) or content_type.is_json_family()):
        alternate = next(
            (link for link in links
             if link.has_relation(ALTERNATE_RELATION) and mt.JSON_LD.match(link.type)),
            None
        )
        if alternate is not None:
            state.follow(alternate.target, max_redirections)
            return Transition.ALTERNATE

    if content_type is not None and not mt.JSON_LD.match(content_type) and content_type.is_json_family():
        contexts = [link for link in links if link.has_relation(CONTEXT_RELATION)]
        if len(contexts) > 1:
            raise LoadError(ErrorCode.MULTIPLE_CONTEXT_LINK_HEADERS)
        if contexts:
            state.context_uri = contexts[0].target

    return Transition.DONE


def _parse_links(values: List[str], base_uri: str) -> List[Link]:
    links = []
    for value in values:
        links.extend(parse_link_header(value, base_uri))
    return links


class HttpLoader(DocumentLoader):
    def __init__(
        self,
        client: httpx.Client = None,
        max_redirections: int = DEFAULT_MAX_REDIRECTIONS,
        parser: Callable[[Optional[MediaType], bytes], Document] = None
    ):
        """Create a loader on top of an httpx client.

        Args:
            client: Transport used for every request. It must not follow
                redirects itself. When omitted the loader creates and owns one.
            max_redirections: Redirects and alternate links followed before
                giving up, 0 for no limit.
            parser: Turns the final body into a Document.
        """
        if max_redirections < 0:
            raise ValueError("max_redirections must be >= 0")

        self._owns_client = client is None
        self._client = client or httpx.Client(follow_redirects=False)
        self.max_redirections = max_redirections
        self.parser = parser or DocumentParser()

    def load_document(self, uri: str, options: LoaderOptions = None) -> Optional[Document]:
        """Fetch ``uri``, following redirects and alternate links.

        Returns None when the final response has an empty body. Transport
        failures, timeouts included, raise LoadError with LOADING_DOCUMENT_FAILED;
        KeyboardInterrupt and other BaseException signals are not converted
        and propagate as-is after the open response is closed.
        """
        options = options or LoaderOptions()
        headers = {'Accept': accept_header(options.request_profile)}
        state = RetrievalState(uri)

        while True:
            response = self._send(state.target_uri, headers)
            try:
                transition = evaluate_response(
                    state, response.status_code, response.headers, self.max_redirections
                )
                if transition is Transition.DONE:
                    body = self._read(response, state.target_uri)
                    break
            finally:
                response.close()

            logger.info("redirect_followed" if transition is Transition.REDIRECT else "alternate_link_followed",
                        status_code=response.status_code,
                        target=state.target_uri,
                        redirections=state.redirection_count)

        return self._create_document(state, body)

    def _send(self, url: str, headers: dict) -> httpx.Response:
        try:
            request = self._client.build_request('GET', url, headers=headers)
            return self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.warning("transport_error", url=url, error=str(e))
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Failed to fetch [{url}]: {e}") from e

    def _read(self, response: httpx.Response, url: str) -> bytes:
        try:
            return response.read()
        except (httpx.HTTPError, OSError) as e:
            logger.warning("transport_error", url=url, error=str(e))
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Failed to read [{url}]: {e}") from e

    def _create_document(self, state: RetrievalState, body: bytes) -> Optional[Document]:
        if not body:
            logger.info("empty_document", url=state.target_uri)
            return None

        document = self.parser(state.content_type, body)
        document.document_url = state.target_uri
        document.context_url = state.context_uri

        logger.info("document_loaded",
                    url=state.target_uri,
                    content_type=str(state.content_type) if state.content_type else None,
                    context_url=state.context_uri,
                    redirections=state.redirection_count,
                    size=len(body))
        return document

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
