"""Tests for the recursive attribute annotation walker."""

import pytest

from scl_mapper.core.types import BindingKind, DataObjectIndex, SENTINEL
from scl_mapper.scl.document import SclDocument
from scl_mapper.scl.indexer import StructuralIndexer
from scl_mapper.scl.walker import AttributePathWalker, get_binding_kind


def _da(xml: str):
    return SclDocument.from_string(xml).root


@pytest.fixture
def walker(bindings):
    return AttributePathWalker(bindings)


def test_minimal_document(walker, minimal_document):
    """Test the single-attribute document resolves to one MONITOR record."""
    index = StructuralIndexer().build(minimal_document)
    records = walker.walk_document(minimal_document, index.data_objects)

    assert len(records) == 1
    assert records[0].kind == BindingKind.MONITOR
    assert records[0].path == "D1/P1.Pos"
    assert records[0].address == "%IX0.0"


def test_relay_records_in_document_order(walker, relay):
    """Test that records follow DOType, DA and Private document order."""
    index = StructuralIndexer().build(relay)
    records = walker.walk_document(relay, index.data_objects)

    assert [(r.kind, r.path, r.address) for r in records] == [
        (BindingKind.MONITOR, "IED1CTRL/XCBR1.Pos.stVal", "%IX0.0"),
        (BindingKind.CONTROL, "IED1CTRL/XCBR1.Pos.Oper.ctlVal", "%QX0.0"),
        (BindingKind.MONITOR, "IED1CTRL/MMXU1.TotW.mag.f", "%IW1"),
    ]


def test_nested_private_paths(walker):
    """Test that each nested Private appends its name to the path."""
    node = _da('''
    <DA name="Oper">
      <Private name="Oper">
        <Private name="ctlVal"><Property Name="sControlVar" Value="breaker_cmd"/></Private>
        <Private name="origin">
          <Private name="orCat"><Property Name="sMonitoringVar" Value="breaker_status"/></Private>
        </Private>
      </Private>
    </DA>
    ''')
    records = walker.walk(node, "D/L.Pos")

    assert [r.path for r in records] == ["D/L.Pos.Oper.ctlVal", "D/L.Pos.Oper.origin.orCat"]
    assert [r.kind for r in records] == [BindingKind.CONTROL, BindingKind.MONITOR]


def test_unresolved_variable_uses_sentinel(walker):
    """Test that an undeclared variable yields no address and renders as X."""
    node = _da('<DA><Property Name="sMonitoringVar" Value="not_declared"/></DA>')
    records = walker.walk(node, "P")

    assert records[0].address is None
    assert records[0].variable == "not_declared"
    assert records[0].rendered_address == SENTINEL


def test_empty_and_unknown_properties_skipped(walker):
    """Test that empty values and unrelated property names produce no records."""
    node = _da('''
    <DA>
      <Property Name="sControlVar" Value=""/>
      <Property Name="sDescription" Value="breaker_status"/>
      <Property Name="sMonitoringVar" Value="breaker_status"/>
    </DA>
    ''')
    records = walker.walk(node, "P")

    assert len(records) == 1
    assert records[0].kind == BindingKind.MONITOR


def test_private_takes_precedence_over_property(walker):
    """Test that properties next to Private containers are not inspected."""
    node = _da('''
    <DA>
      <Property Name="sMonitoringVar" Value="breaker_status"/>
      <Private name="q"><Property Name="sMonitoringVar" Value="total_power"/></Private>
    </DA>
    ''')
    records = walker.walk(node, "P")

    assert [r.path for r in records] == ["P.q"]


def test_unindexed_do_type_starts_from_empty_path(walker):
    """Test that a DOType not referenced by any LNodeType starts from an empty path."""
    document = SclDocument.from_string('''
    <SCL><DataTypeTemplates>
      <DOType id="Orphan"><DA name="stVal"><Private name="stVal">
        <Property Name="sMonitoringVar" Value="breaker_status"/>
      </Private></DA></DOType>
    </DataTypeTemplates></SCL>
    ''')
    records = walker.walk_document(document, DataObjectIndex())

    assert [r.path for r in records] == [".stVal"]


def test_walk_is_repeatable(walker, relay):
    """Test that walking the same document twice gives identical records."""
    index = StructuralIndexer().build(relay)

    first = walker.walk_document(relay, index.data_objects)
    second = walker.walk_document(relay, index.data_objects)

    assert first == second


def test_binding_kind_registry():
    """Test the property names recognised as binding requests."""
    assert get_binding_kind("sMonitoringVar") == BindingKind.MONITOR
    assert get_binding_kind("sControlVar") == BindingKind.CONTROL
    assert get_binding_kind("smonitoringvar") is None


def test_capitalized_property_fields_win(walker):
    """Test that Name/Value take precedence over name/value on the same Property."""
    node = _da('''
    <DA>
      <Property Name="sControlVar" name="sMonitoringVar" Value="breaker_cmd" value="breaker_status"/>
    </DA>
    ''')
    records = walker.walk(node, "P")

    assert len(records) == 1
    assert records[0].kind == BindingKind.CONTROL
    assert records[0].variable == "breaker_cmd"
    assert records[0].address == "%QX0.0"


def test_deeply_nested_private_chain(walker):
    """Test that a Private chain deeper than libxml2's default depth limit is walked."""
    depth = 300
    xml = (
        "<DA>"
        + '<Private name="p">' * depth
        + '<Property Name="sMonitoringVar" Value="breaker_status"/>'
        + "</Private>" * depth
        + "</DA>"
    )
    records = walker.walk(_da(xml), "D")

    assert len(records) == 1
    assert records[0].path == "D" + ".p" * depth
