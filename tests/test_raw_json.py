"""RawJSON column type tests."""

import logging

from workflow_catalog.models.raw_json import RawJSON


def test_bind_serializes_compactly():
    assert RawJSON(list).process_bind_param([{"a": 1}], None) == '[{"a":1}]'
    assert RawJSON(dict).process_bind_param(None, None) is None


def test_result_parses_documents():
    assert RawJSON(dict).process_result_value('{"k": [1, 2]}', None) == {"k": [1, 2]}


def test_result_degrades_to_empty_container(caplog):
    with caplog.at_level(logging.WARNING):
        assert RawJSON(list).process_result_value("{broken", None) == []
        assert RawJSON(dict).process_result_value("[1]", None) == {}
    assert RawJSON(list).process_result_value(None, None) == []
    assert len(caplog.records) == 2
