"""
Tests for WriteConcern and ReadPreference.

This test module covers:
- Named write concern constants and their acknowledgement flags
- Write concern validation
- Read preference factories, equality and tag set rules
- Document rendering
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from db_client_options.concerns import (
    ACKNOWLEDGED,
    FSYNCED,
    JOURNAL_SAFE,
    JOURNALED,
    MAJORITY,
    REPLICA_ACKNOWLEDGED,
    UNACKNOWLEDGED,
    ReadPreference,
    ReadPreferenceMode,
    WriteConcern,
)

# ============================================================================
# WriteConcern
# ============================================================================


class TestWriteConcern:
    """Test write concern constants and validation."""

    def test_default_is_acknowledged(self) -> None:
        assert WriteConcern() == ACKNOWLEDGED
        assert WriteConcern.acknowledged() is ACKNOWLEDGED
        assert ACKNOWLEDGED.is_acknowledged

    def test_named_constants(self) -> None:
        assert not UNACKNOWLEDGED.is_acknowledged
        assert JOURNAL_SAFE == JOURNALED
        assert JOURNALED.j
        assert FSYNCED.fsync
        assert REPLICA_ACKNOWLEDGED.w == 2
        assert MAJORITY.w == "majority"
        assert WriteConcern.majority() is MAJORITY
        assert WriteConcern.journaled() is JOURNALED
        assert WriteConcern.unacknowledged() is UNACKNOWLEDGED

    def test_value_equality(self) -> None:
        assert WriteConcern(w=1, j=True) == JOURNAL_SAFE
        assert WriteConcern(w=2) != ACKNOWLEDGED

    def test_immutable(self) -> None:
        with pytest.raises(ValidationError):
            ACKNOWLEDGED.w = 3  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"w": -1},
            {"w": ""},
            {"wtimeout": -1},
            {"w": 0, "j": True},
            {"w": 0, "fsync": True},
        ],
    )
    def test_rejects_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            WriteConcern(**kwargs)

    def test_with_w(self) -> None:
        concern = JOURNALED.with_w(3)

        assert concern.w == 3
        assert concern.j
        assert JOURNALED.w == 1

    def test_to_document(self) -> None:
        assert ACKNOWLEDGED.to_document() == {"w": 1}
        assert WriteConcern(w="majority", wtimeout=500, j=True).to_document() == {
            "w": "majority",
            "wtimeout": 500,
            "j": True,
        }


# ============================================================================
# ReadPreference
# ============================================================================


class TestReadPreference:
    """Test read preference factories and validation."""

    @pytest.mark.parametrize(
        "factory, mode",
        [
            (ReadPreference.primary, ReadPreferenceMode.PRIMARY),
            (ReadPreference.primary_preferred, ReadPreferenceMode.PRIMARY_PREFERRED),
            (ReadPreference.secondary, ReadPreferenceMode.SECONDARY),
            (ReadPreference.secondary_preferred, ReadPreferenceMode.SECONDARY_PREFERRED),
            (ReadPreference.nearest, ReadPreferenceMode.NEAREST),
        ],
    )
    def test_factories(self, factory, mode: ReadPreferenceMode) -> None:
        preference = factory()

        assert preference.mode == mode
        assert preference.name == mode.value
        assert preference == factory()

    def test_slave_ok(self) -> None:
        assert not ReadPreference.primary().is_slave_ok
        assert ReadPreference.secondary().is_slave_ok
        assert ReadPreference.nearest().is_slave_ok

    def test_tag_sets(self) -> None:
        preference = ReadPreference.secondary({"dc": "east"}, {"dc": "west"})

        assert preference.tag_sets == ((("dc", "east"),), (("dc", "west"),))
        assert preference != ReadPreference.secondary()
        assert preference == ReadPreference.secondary({"dc": "east"}, {"dc": "west"})
        assert preference.to_document() == {
            "mode": "secondary",
            "tags": [{"dc": "east"}, {"dc": "west"}],
        }

    def test_tag_sets_are_frozen(self) -> None:
        tags = {"dc": "ny"}
        preference = ReadPreference.nearest(tags)

        tags["dc"] = "sf"
        with pytest.raises(TypeError):
            preference.tag_sets[0][0] = ("dc", "sf")  # type: ignore[index]
        preference.to_document()["tags"][0]["dc"] = "sf"

        assert preference.to_document()["tags"] == [{"dc": "ny"}]

    def test_hashable_with_tag_sets(self) -> None:
        preference = ReadPreference.secondary({"dc": "ny", "rack": "1"})

        assert hash(preference) == hash(
            ReadPreference.secondary({"dc": "ny", "rack": "1"})
        )

    def test_primary_rejects_tag_sets(self) -> None:
        with pytest.raises(ValidationError):
            ReadPreference(mode=ReadPreferenceMode.PRIMARY, tag_sets=({"dc": "east"},))

    def test_mode_from_string(self) -> None:
        assert ReadPreference(mode="secondaryPreferred") == ReadPreference.secondary_preferred()
