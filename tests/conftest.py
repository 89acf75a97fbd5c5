"""Shared fixtures for SCL mapper tests."""

import textwrap
from pathlib import Path

import pytest

from scl_mapper.core.types import BindingTable, VariableBinding
from scl_mapper.scl.document import SclDocument


FIXTURES_PATH = Path(__file__).parent / "fixtures"

MINIMAL_SCL = textwrap.dedent('''\
    <?xml version="1.0" encoding="UTF-8"?>
    <SCL xmlns="http://www.iec.ch/61850/2003/SCL">
      <IED name="D">
        <AccessPoint name="AP1">
          <Server>
            <LDevice inst="1">
              <LN lnType="T1" lnClass="P" inst="1"/>
            </LDevice>
          </Server>
        </AccessPoint>
      </IED>
      <DataTypeTemplates>
        <LNodeType id="T1" lnClass="P">
          <DO name="Pos" type="DOT1"/>
        </LNodeType>
        <DOType id="DOT1" cdc="SPS">
          <DA name="stVal" bType="BOOLEAN" fc="ST">
            <Property name="sMonitoringVar" value="V1"/>
          </DA>
        </DOType>
      </DataTypeTemplates>
    </SCL>
''')

MINIMAL_ST = textwrap.dedent('''\
    PROGRAM prog0
      VAR
        V1 AT %IX0.0 : BOOL;
      END_VAR
    END_PROGRAM
''')


@pytest.fixture
def st_path():
    return FIXTURES_PATH / "plc_program.st"


@pytest.fixture
def relay_path():
    return FIXTURES_PATH / "relay.scl"


@pytest.fixture
def feeder_path():
    return FIXTURES_PATH / "feeder.scl"


@pytest.fixture
def relay(relay_path):
    return SclDocument.load(relay_path)


@pytest.fixture
def feeder(feeder_path):
    return SclDocument.load(feeder_path)


@pytest.fixture
def minimal_document():
    return SclDocument.from_string(MINIMAL_SCL, "minimal.scl")


@pytest.fixture
def minimal_files(tmp_path):
    """Write the minimal ST program and SCL document to disk."""
    st_file = tmp_path / "prog.st"
    st_file.write_text(MINIMAL_ST)
    scl_file = tmp_path / "minimal.scl"
    scl_file.write_text(MINIMAL_SCL)
    return st_file, scl_file


@pytest.fixture
def bindings():
    table = BindingTable()
    for name, address in [
        ("breaker_status", "%IX0.0"),
        ("breaker_cmd", "%QX0.0"),
        ("total_power", "%IW1"),
        ("V1", "%IX0.0"),
    ]:
        table.add(VariableBinding(name=name, address=address, type_name="BOOL"))
    return table
