import json

from garage import Engine, make_v8, path_of
from lazywire.identifiers import display_name, locate, locate_type, normalize


def test_class_identifier_normalized_to_lower_case_path():
    assert normalize(Engine) == path_of(Engine).lower()


def test_leading_separator_and_case_ignored():
    assert normalize(".garage.Engine") == normalize("GARAGE.ENGINE") == "garage.engine"


def test_only_one_leading_separator_stripped():
    assert normalize("..garage.Engine") == ".garage.engine"


def test_free_form_identifiers_lower_cased():
    assert normalize("Log") == "log"


def test_display_name():
    assert display_name(Engine) == path_of(Engine)
    assert display_name("log") == "log"


def test_locate_class_function_and_module():
    assert locate(path_of(Engine)) is Engine
    assert locate(f"{make_v8.__module__}.make_v8") is make_v8
    assert locate("json") is json
    assert locate("json.JSONDecoder.decode") is json.JSONDecoder.decode


def test_locate_missing():
    assert locate("no.such.module") is None
    assert locate("json.NoSuchThing") is None
    assert locate("") is None
    assert locate("log") is None


def test_locate_type_only_returns_classes():
    assert locate_type(".json.JSONDecoder") is json.JSONDecoder
    assert locate_type("json.dumps") is None
    assert locate_type("json") is None


def test_locate_relative_or_malformed_paths():
    assert locate("..json") is None
    assert locate(".") is None
    assert locate("json..JSONDecoder") is None
    assert locate("json.") is None
