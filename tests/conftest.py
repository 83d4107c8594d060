import pytest

from schema_mapper.config import get_settings
from schema_mapper.records import FieldRef, Mapping, TargetNodeRef
from schema_mapper.samples import get_sample_schema
from schema_mapper.schema_utils import build_schema_tree
from schema_mapper.tree import iter_nodes


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person_schema():
    return get_sample_schema("person")


@pytest.fixture
def person_tree(person_schema):
    return build_schema_tree(person_schema)


def node_at(tree, path):
    """Find a node by its dotted path key."""
    for node in iter_nodes(tree):
        if node.path_key == path:
            return node
    raise KeyError(path)


def make_mapping(target_name, target_type="string", field_name="F1", field_type="text", path="", **kwargs):
    target_id = f"{path}:1" if path else ""
    return Mapping(
        target_node=TargetNodeRef(id=target_id, name=target_name, type=target_type, path=path),
        field=FieldRef(
            name=field_name,
            field_type=field_type,
            field_essence=kwargs.pop("field_essence", None),
            dgh=kwargs.pop("dgh", None),
            always=kwargs.pop("always", None),
        ),
        **kwargs,
    )
