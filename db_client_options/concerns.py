"""
Write concern and read preference policies.

Both are immutable pydantic models compared by value, so two independently
built policies with the same settings are interchangeable.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAJORITY_TAG = "majority"

# One tag set as ordered (name, value) pairs
TagSet = tuple[tuple[str, str], ...]


class WriteConcern(BaseModel):
    """
    Policy describing how a write must be confirmed before it is reported
    as successful.

    Attributes:
        w: Number of servers that must acknowledge the write, or a tag set
            name such as "majority". 0 disables acknowledgement.
        wtimeout: Milliseconds to wait for replication. 0 waits indefinitely.
        fsync: Whether the server must flush data files before acknowledging.
        j: Whether the server must commit the write to its journal before
            acknowledging.
    """

    model_config = ConfigDict(frozen=True)

    w: Union[int, str] = 1
    wtimeout: int = Field(default=0, ge=0)
    fsync: bool = False
    j: bool = False

    @field_validator("w")
    @classmethod
    def validate_w(cls, v: Union[int, str]) -> Union[int, str]:
        """Validate the acknowledgement count or tag name.

        Raises
        ------
        ValueError
            If w is a negative integer or an empty string.
        """
        if isinstance(v, str):
            if not v:
                raise ValueError("w tag name cannot be empty")
            return v
        if v < 0:
            raise ValueError(f"w must be non-negative, got {v}")
        return v

    @model_validator(mode="after")
    def validate_acknowledgement(self) -> "WriteConcern":
        if self.w == 0 and (self.j or self.fsync):
            raise ValueError("an unacknowledged write concern cannot require fsync or journaling")
        return self

    @property
    def is_acknowledged(self) -> bool:
        return self.w != 0

    def with_w(self, w: Union[int, str]) -> "WriteConcern":
        return WriteConcern(w=w, wtimeout=self.wtimeout, fsync=self.fsync, j=self.j)

    def to_document(self) -> dict[str, Any]:
        """Render as the getLastError document sent to the server."""
        document: dict[str, Any] = {"w": self.w}
        if self.wtimeout:
            document["wtimeout"] = self.wtimeout
        if self.fsync:
            document["fsync"] = True
        if self.j:
            document["j"] = True
        return document

    @classmethod
    def acknowledged(cls) -> "WriteConcern":
        return ACKNOWLEDGED

    @classmethod
    def unacknowledged(cls) -> "WriteConcern":
        return UNACKNOWLEDGED

    @classmethod
    def journaled(cls) -> "WriteConcern":
        return JOURNALED

    @classmethod
    def majority(cls) -> "WriteConcern":
        return MAJORITY


ACKNOWLEDGED = WriteConcern(w=1)
UNACKNOWLEDGED = WriteConcern(w=0)
FSYNCED = WriteConcern(w=1, fsync=True)
JOURNALED = WriteConcern(w=1, j=True)
# Older name for JOURNALED
JOURNAL_SAFE = JOURNALED
REPLICA_ACKNOWLEDGED = WriteConcern(w=2)
MAJORITY = WriteConcern(w=MAJORITY_TAG)


class ReadPreferenceMode(str, Enum):
    """
    Replica roles a read may be routed to.

    Attributes
    ----------
    PRIMARY : str
        Only the primary serves reads.
    PRIMARY_PREFERRED : str
        The primary when available, otherwise a secondary.
    SECONDARY : str
        Only secondaries serve reads.
    SECONDARY_PREFERRED : str
        A secondary when available, otherwise the primary.
    NEAREST : str
        Any member within the acceptable latency window.
    """

    PRIMARY = "primary"
    PRIMARY_PREFERRED = "primaryPreferred"
    SECONDARY = "secondary"
    SECONDARY_PREFERRED = "secondaryPreferred"
    NEAREST = "nearest"


class ReadPreference(BaseModel):
    """
    Policy describing which replica members may serve a read.

    Attributes:
        mode: Replica role selection mode.
        tag_sets: Ordered tag sets used to narrow eligible members, each
            stored as a tuple of (name, value) pairs. Mappings are accepted
            on input. Not allowed with the primary mode.
    """

    model_config = ConfigDict(frozen=True)

    mode: ReadPreferenceMode = ReadPreferenceMode.PRIMARY
    tag_sets: tuple[TagSet, ...] = ()

    @field_validator("tag_sets", mode="before")
    @classmethod
    def freeze_tag_sets(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(
                tuple(tags.items()) if isinstance(tags, Mapping) else tags
                for tags in v
            )
        return v

    @model_validator(mode="after")
    def validate_tag_sets(self) -> "ReadPreference":
        if self.mode == ReadPreferenceMode.PRIMARY and self.tag_sets:
            raise ValueError("primary read preference cannot be combined with tag sets")
        return self

    @property
    def name(self) -> str:
        return self.mode.value

    @property
    def is_slave_ok(self) -> bool:
        return self.mode != ReadPreferenceMode.PRIMARY

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"mode": self.mode.value}
        if self.tag_sets:
            document["tags"] = [dict(tags) for tags in self.tag_sets]
        return document

    @classmethod
    def primary(cls) -> "ReadPreference":
        return cls(mode=ReadPreferenceMode.PRIMARY)

    @classmethod
    def primary_preferred(cls, *tag_sets: Mapping[str, str]) -> "ReadPreference":
        return cls(mode=ReadPreferenceMode.PRIMARY_PREFERRED, tag_sets=tag_sets)

    @classmethod
    def secondary(cls, *tag_sets: Mapping[str, str]) -> "ReadPreference":
        return cls(mode=ReadPreferenceMode.SECONDARY, tag_sets=tag_sets)

    @classmethod
    def secondary_preferred(cls, *tag_sets: Mapping[str, str]) -> "ReadPreference":
        return cls(mode=ReadPreferenceMode.SECONDARY_PREFERRED, tag_sets=tag_sets)

    @classmethod
    def nearest(cls, *tag_sets: Mapping[str, str]) -> "ReadPreference":
        return cls(mode=ReadPreferenceMode.NEAREST, tag_sets=tag_sets)
