import pytest

from jsonld_loader import media_type as mt
from jsonld_loader.document import Document, DocumentParser
from jsonld_loader.errors import ErrorCode, LoadError
from jsonld_loader.media_type import MediaType


@pytest.fixture
def parser():
    return DocumentParser()


def test_parse_jsonld(parser):
    document = parser.parse(mt.JSON_LD, b'{"@context": {}, "@id": "x"}')

    assert document.content == {"@context": {}, "@id": "x"}
    assert document.content_type == mt.JSON_LD
    assert document.profile is None


def test_parse_plus_json(parser):
    document = parser.parse(MediaType.of("application/activity+json"), b'[1, 2]')

    assert document.content == [1, 2]


def test_unknown_content_type_is_parsed_as_json(parser):
    assert parser.parse(None, b'{"a": 1}').content == {"a": 1}


def test_profile_parameter_is_kept(parser):
    content_type = MediaType.of('application/ld+json;profile="http://www.w3.org/ns/json-ld#expanded"')

    document = parser.parse(content_type, b'[]')

    assert document.profile == "http://www.w3.org/ns/json-ld#expanded"


def test_utf16_json(parser):
    assert parser.parse(mt.JSON, '{"name": "Zoë"}'.encode('utf-16')).content == {"name": "Zoë"}


def test_nquads_are_kept_as_text(parser):
    body = b'<http://a> <http://b> "c" .\n'

    assert parser.parse(mt.N_QUADS, body).content == body.decode()


def test_html_uses_charset(parser):
    document = parser.parse(MediaType.of("text/html; charset=iso-8859-1"), "<p>café</p>".encode('iso-8859-1'))

    assert document.content == "<p>café</p>"


def test_unknown_charset_fails(parser):
    with pytest.raises(LoadError):
        parser.parse(MediaType.of("text/html; charset=no-such-charset"), b"<p></p>")


def test_invalid_json_fails(parser):
    with pytest.raises(LoadError) as excinfo:
        parser.parse(mt.JSON, b'{"a": ')

    assert excinfo.value.code is ErrorCode.LOADING_DOCUMENT_FAILED
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_unsupported_content_type_fails(parser):
    with pytest.raises(LoadError) as excinfo:
        parser.parse(MediaType.of("image/png"), b"\x89PNG")

    assert "image/png" in str(excinfo.value)


def test_to_dict():
    document = Document({"a": 1}, mt.JSON, document_url="https://example.org/a",
                        context_url="https://example.org/ctx")

    assert document.to_dict() == {
        'documentUrl': "https://example.org/a",
        'contextUrl': "https://example.org/ctx",
        'contentType': "application/json",
        'profile': None,
        'document': {"a": 1},
    }


def test_error_default_message():
    error = LoadError(ErrorCode.MULTIPLE_CONTEXT_LINK_HEADERS)

    assert str(error).endswith("[code=MULTIPLE_CONTEXT_LINK_HEADERS].")
    assert error.code is ErrorCode.MULTIPLE_CONTEXT_LINK_HEADERS
