import json

import pytest

from dynns.core import vault
from dynns.core.exceptions import ConfigurationError
from dynns.core.labels import KeyValue
from dynns.core.payload import NamespaceRequest, assemble


def _minimal(**overrides):
    kwargs = dict(product_key="foo", ttl="24h", cluster="eu-1", namespace="bar")
    kwargs.update(overrides)
    return assemble(**kwargs)


def test_extra_properties_flattened_and_empty_fields_omitted():
    request = _minimal(extra_properties={"owner": "team-x"})
    payload = json.loads(request.to_json())
    assert payload == {
        "productkey": "foo",
        "ttl": "24h",
        "cluster": "eu-1",
        "namespace": "bar",
        "owner": "team-x",
    }


def test_labels_and_annotations_serialized_as_key_value_lists():
    request = _minimal(
        labels={"env": "dev", "team": "x"},
        annotations=[KeyValue("note", "a=b")],
    )
    payload = request.to_dict()
    assert payload["labels"] == [{"key": "env", "value": "dev"}, {"key": "team", "value": "x"}]
    assert payload["annotations"] == [{"key": "note", "value": "a=b"}]


def test_implicit_default_account_omits_vault_config():
    payload = _minimal(
        vault_service_accounts=vault.build(None, []),
        extra_properties={"owner": "team-x"},
    ).to_dict()
    assert "vault_config" not in payload
    assert "labels" not in payload
    assert "annotations" not in payload
    assert payload["owner"] == "team-x"


def test_vault_config_renamed_and_prefixed_with_default():
    payload = _minimal(vault_service_accounts=vault.build("a, b", ["default"])).to_dict()
    assert payload["vault_config"] == {"service_account_name": "default,a,b"}
    assert "vault_service_accounts" not in payload


def test_vault_config_omitted_when_rendered_empty():
    payload = _minimal(vault_service_accounts=vault.build("")).to_dict()
    assert "vault_config" not in payload


def test_extra_properties_override_fixed_fields():
    payload = _minimal(extra_properties={"ttl": "1h", "nested": {"a": [1, None, True]}}).to_dict()
    assert payload["ttl"] == "1h"
    assert payload["nested"] == {"a": [1, None, True]}


@pytest.mark.parametrize("field", ["product_key", "ttl", "cluster", "namespace"])
@pytest.mark.parametrize("value", ["", "  ", None])
def test_required_fields(field, value):
    with pytest.raises(ConfigurationError, match="is required"):
        _minimal(**{field: value})


def test_request_is_frozen():
    request = _minimal()
    assert isinstance(request, NamespaceRequest)
    with pytest.raises(AttributeError):
        request.ttl = "1h"


def test_assemble_copies_extra_properties():
    extra = {"owner": "a"}
    request = _minimal(extra_properties=extra)
    extra["owner"] = "b"
    assert request.to_dict()["owner"] == "a"


def test_pretty_json():
    text = _minimal().to_json(pretty=True)
    assert text.startswith("{\n  ")
