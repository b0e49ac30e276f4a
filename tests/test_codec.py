"""
Tests for document codecs and their factories.

This test module covers:
- FACTORY singletons and the factory protocols
- Eager and lazy decoding
- JSON and Pydantic encoding
"""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from db_client_options.codec import (
    CodecFactory,
    DecoderFactory,
    DefaultDocumentDecoder,
    DefaultDocumentEncoder,
    EncoderFactory,
    LazyDocument,
    LazyDocumentDecoder,
)


class User(BaseModel):
    """Sample document model."""

    name: str
    age: int


# ============================================================================
# Factories
# ============================================================================


class TestFactories:
    """Test the FACTORY singletons."""

    def test_factories_create_fresh_instances(self) -> None:
        first = DefaultDocumentDecoder.FACTORY.create()
        second = DefaultDocumentDecoder.FACTORY.create()

        assert isinstance(first, DefaultDocumentDecoder)
        assert first is not second

    def test_factories_satisfy_protocols(self) -> None:
        assert isinstance(DefaultDocumentDecoder.FACTORY, DecoderFactory)
        assert isinstance(LazyDocumentDecoder.FACTORY, DecoderFactory)
        assert isinstance(DefaultDocumentEncoder.FACTORY, EncoderFactory)

    def test_factory_passes_arguments(self) -> None:
        factory = CodecFactory(DefaultDocumentDecoder, model=User)

        decoder = factory.create()

        assert decoder.decode('{"name": "ada", "age": 36}') == User(name="ada", age=36)
        assert factory.codec_class is DefaultDocumentDecoder
        assert repr(factory) == "CodecFactory(DefaultDocumentDecoder)"


# ============================================================================
# Decoding
# ============================================================================


class TestDecoders:
    """Test eager and lazy decoders."""

    def test_default_decoder_accepts_bytes_and_str(self) -> None:
        decoder = DefaultDocumentDecoder()

        assert decoder.decode(b'{"a": 1}') == {"a": 1}
        assert decoder.decode('{"a": 1}') == {"a": 1}

    def test_lazy_decoder_defers_parsing(self) -> None:
        document = LazyDocumentDecoder().decode(b'{"a": 1, "b": [2, 3]}')

        assert isinstance(document, LazyDocument)
        assert not document.is_decoded
        assert document["b"] == [2, 3]
        assert document.is_decoded
        assert dict(document) == {"a": 1, "b": [2, 3]}
        assert len(document) == 2

    def test_lazy_document_missing_key(self) -> None:
        document = LazyDocument('{"a": 1}')

        with pytest.raises(KeyError):
            document["missing"]

    def test_lazy_document_repr(self) -> None:
        document = LazyDocument(b"{}")

        assert "undecoded" in repr(document)
        dict(document)
        assert repr(document) == "LazyDocument({})"


# ============================================================================
# Encoding
# ============================================================================


class TestEncoder:
    """Test the default encoder."""

    def test_encodes_mapping(self) -> None:
        assert DefaultDocumentEncoder().encode({"a": 1, "b": "x"}) == b'{"a":1,"b":"x"}'

    def test_encodes_pydantic_model(self) -> None:
        encoded = DefaultDocumentEncoder().encode(User(name="ada", age=36))

        assert encoded == b'{"name":"ada","age":36}'

    def test_encodes_lazy_document_without_parsing(self) -> None:
        document = LazyDocument(b'{"a": 1}')

        assert DefaultDocumentEncoder().encode(document) == b'{"a": 1}'
        assert not document.is_decoded
