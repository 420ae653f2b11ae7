import pytest

from jsonld_loader import media_type as mt
from jsonld_loader.media_type import MediaType, split_outside_quotes


def test_parse_type_and_subtype():
    media_type = MediaType.of("application/ld+json")

    assert media_type.type == "application"
    assert media_type.subtype == "ld+json"
    assert media_type.parameters == {}


def test_parse_is_case_insensitive():
    assert MediaType.of("Application/LD+JSON") == mt.JSON_LD
    assert mt.JSON_LD.match(MediaType.of("APPLICATION/ld+json"))


def test_parse_parameters():
    media_type = MediaType.of('application/ld+json; profile="http://www.w3.org/ns/json-ld#expanded"; charset=UTF-8')

    assert media_type.parameter("profile") == "http://www.w3.org/ns/json-ld#expanded"
    assert media_type.parameter("CHARSET") == "UTF-8"


def test_parameters_do_not_affect_matching():
    assert mt.JSON.match(MediaType.of("application/json; charset=utf-8"))
    assert MediaType.of("application/json; charset=utf-8") == mt.JSON


@pytest.mark.parametrize("value", [None, "", "application", "/json", "application/", "text /html", "a/b/c"])
def test_malformed_values_are_rejected(value):
    assert MediaType.of(value) is None


def test_malformed_parameters_are_skipped():
    media_type = MediaType.of("application/json; charset; =x; q=0.5")

    assert media_type == mt.JSON
    assert media_type.parameters == {"q": "0.5"}


def test_json_family():
    assert MediaType.of("application/json").is_json_family()
    assert MediaType.of("application/activity+json").is_json_family()
    assert MediaType.of("application/ld+json").is_json_family()
    assert not MediaType.of("text/html").is_json_family()
    assert not MediaType.of("application/jsonp").is_json_family()


def test_json_suffix_only_checks_subtype():
    assert not MediaType.of("application+json/xml").has_json_suffix()


def test_wildcard_matches_anything():
    assert mt.ANY.match(mt.HTML)
    assert MediaType.of("text/*").match(mt.HTML)
    assert not MediaType.of("text/*").match(mt.JSON)
    assert not mt.HTML.match(mt.ANY)


def test_match_none():
    assert not mt.JSON_LD.match(None)


@pytest.mark.parametrize("value", [
    "application/ld+json",
    'application/ld+json;profile="http://www.w3.org/ns/json-ld#flattened http://www.w3.org/ns/json-ld#compacted"',
    "text/html;charset=utf-8",
    'application/json;title="say \\"hi\\""',
])
def test_serialized_form_parses_back_to_equal_value(value):
    media_type = MediaType.of(value)
    reparsed = MediaType.of(str(media_type))

    assert reparsed == media_type
    assert reparsed.parameters == media_type.parameters


def test_str_quotes_values_with_spaces():
    media_type = MediaType("application", "ld+json", {"profile": "a b"})

    assert str(media_type) == 'application/ld+json;profile="a b"'


def test_split_outside_quotes_keeps_quoted_separators():
    assert split_outside_quotes('a;b="x;y";c', ';') == ['a', 'b="x;y"', 'c']
    assert split_outside_quotes('<http://a/b,c>; rel=x, <d>', ',') == ['<http://a/b,c>; rel=x', ' <d>']
