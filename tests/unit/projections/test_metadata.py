"""Tests for the _metadata envelope of stored projection documents."""

import pytest
from pydantic import ValidationError

from ledgerline.projections import (
    METADATA_KEY,
    ReadModelMetadata,
    attach_metadata,
    read_metadata,
    stream_position_of,
    strip_metadata,
)


@pytest.fixture
def metadata() -> ReadModelMetadata:
    return ReadModelMetadata(
        stream_id="cart-1",
        name="cart",
        schema_version=2,
        stream_position="7",
    )


def test_serializes_with_camel_case_names(metadata):
    assert metadata.to_document() == {
        "streamId": "cart-1",
        "name": "cart",
        "schemaVersion": 2,
        "streamPosition": "7",
    }


def test_parses_camel_case_and_field_names(metadata):
    assert ReadModelMetadata.model_validate(metadata.to_document()) == metadata
    assert (
        ReadModelMetadata(stream_id="cart-1", name="cart", schema_version=2, stream_position="7")
        == metadata
    )


def test_schema_version_must_be_positive():
    with pytest.raises(ValidationError):
        ReadModelMetadata(stream_id="s", name="n", schema_version=0, stream_position="0")


def test_attach_adds_envelope_without_mutating_state(metadata):
    state = {"total": 3}

    document = attach_metadata(state, metadata)

    assert document == {"total": 3, METADATA_KEY: metadata.to_document()}
    assert state == {"total": 3}


def test_attach_replaces_stale_envelope(metadata):
    document = attach_metadata({"total": 3, METADATA_KEY: {"streamPosition": "1"}}, metadata)

    assert document[METADATA_KEY]["streamPosition"] == "7"


class TestStripMetadata:
    def test_removes_envelope(self, metadata):
        assert strip_metadata({"total": 3, METADATA_KEY: metadata.to_document()}) == {"total": 3}

    def test_document_without_envelope_is_returned_as_is(self):
        assert strip_metadata({"total": 3}) == {"total": 3}

    def test_missing_document_reads_as_none(self):
        assert strip_metadata(None) is None

    def test_non_mapping_document_reads_as_none(self):
        assert strip_metadata("corrupt") is None


def test_read_metadata(metadata):
    assert read_metadata({"total": 3, METADATA_KEY: metadata.to_document()}) == metadata
    assert read_metadata({"total": 3}) is None
    assert read_metadata(None) is None


def test_stream_position_keeps_full_precision(metadata):
    position = 2**64 + 1
    document = attach_metadata({}, metadata.model_copy(update={"stream_position": str(position)}))

    assert stream_position_of(document) == position
    assert stream_position_of({}) is None
