"""The ``_metadata`` envelope stored alongside every projection document."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

METADATA_KEY = "_metadata"


class ReadModelMetadata(BaseModel):
    """Versioning information attached to a stored projection document.

    The envelope records how far the document has consumed its stream.
    ``stream_position`` is kept as a decimal string because positions may
    exceed the integer range that JSON-backed stores represent exactly.

    On the wire the fields use camelCase names:
    ``{"streamId", "name", "schemaVersion", "streamPosition"}``.

    Attributes:
        stream_id: Stream the document is derived from
        name: Projection name
        schema_version: Projection schema version
        stream_position: Position of the last event folded into the document
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    stream_id: str
    name: str
    schema_version: int = Field(ge=1)
    stream_position: str

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def strip_metadata(document: Any) -> dict[str, Any] | None:
    """Return the raw projection state of a stored document.

    Args:
        document: Stored document as read from the document store

    Returns:
        The document without its envelope, or None when nothing usable is
        stored.
    """
    if not isinstance(document, dict):
        return None
    return {key: value for key, value in document.items() if key != METADATA_KEY}


def attach_metadata(state: dict[str, Any], metadata: ReadModelMetadata) -> dict[str, Any]:
    """Merge projection state with its envelope into a storable document."""
    return {**state, METADATA_KEY: metadata.to_document()}


def read_metadata(document: Any) -> ReadModelMetadata | None:
    """Parse the envelope of a stored document, if it has one."""
    if not isinstance(document, dict) or METADATA_KEY not in document:
        return None
    return ReadModelMetadata.model_validate(document[METADATA_KEY])


def stream_position_of(document: Any) -> int | None:
    """Return the stream position recorded in a stored document.

    Examples:
        >>> stream_position_of({"count": 2, "_metadata": {
        ...     "streamId": "s", "name": "n", "schemaVersion": 1,
        ...     "streamPosition": "18446744073709551617"}})
        18446744073709551617
    """
    metadata = read_metadata(document)
    return int(metadata.stream_position) if metadata is not None else None
