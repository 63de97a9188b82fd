import json

import pytest

from ordersearch.storage.search_store import LoadError, SchemaLoader
from ordersearch.storage.search_store import BadRequestError


def test_load_json(tmp_path):
    schema = {"mappings": {"properties": {"email": {"type": "keyword"}}}}
    (tmp_path / "orders.mapping.json").write_text(json.dumps(schema))
    assert SchemaLoader(tmp_path).load("orders.mapping.json") == schema


def test_load_yaml(tmp_path):
    (tmp_path / "orders.mapping.yaml").write_text(
        "properties:\n  email:\n    type: keyword\n"
    )
    assert SchemaLoader(str(tmp_path)).load("orders.mapping.yaml") == {
        "properties": {"email": {"type": "keyword"}}
    }


def test_load_packaged_mapping():
    from ordersearch.orders._config import MAPPINGS_DIR

    schema = SchemaLoader(MAPPINGS_DIR).load("orders.mapping.json")
    properties = schema["mappings"]["properties"]
    assert properties["customer"]["properties"]["email"]["type"] == "keyword"


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]", '"text"'],
)
def test_load_malformed(tmp_path, content: str):
    (tmp_path / "bad.json").write_text(content)
    with pytest.raises(LoadError):
        SchemaLoader(tmp_path).load("bad.json")


def test_load_missing(tmp_path):
    with pytest.raises(LoadError):
        SchemaLoader(tmp_path).load("missing.json")


@pytest.mark.parametrize("name", ["", "   ", None])
def test_load_blank_name(tmp_path, name):
    with pytest.raises(BadRequestError):
        SchemaLoader(tmp_path).load(name)
