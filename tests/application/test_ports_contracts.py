from __future__ import annotations

from io import StringIO

from lib_pmem_output.adapters import RichConsoleAdapter, TextStreamAdapter
from lib_pmem_output.application.ports import ChecksumValidatorPort, StreamPort
from lib_pmem_output.domain.checksum import fletcher64_validator


def test_adapters_satisfy_stream_port() -> None:
    assert isinstance(TextStreamAdapter(StringIO()), StreamPort)
    assert isinstance(RichConsoleAdapter(), StreamPort)


def test_fletcher64_validator_satisfies_checksum_port() -> None:
    assert isinstance(fletcher64_validator, ChecksumValidatorPort)


def test_objects_without_write_are_not_streams() -> None:
    assert not isinstance(object(), StreamPort)
