"""
Document encoders and decoders, and the factories that create them.

``ClientOptions`` hands its decoder and encoder factories straight to the
codec subsystem, which calls ``create()`` once per connection or cursor.
Every concrete codec class here has a ready-made ``FACTORY`` singleton.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from .logger import get_logger
from .utils import pydantic_parse, pydantic_serialize

logger = get_logger(__name__)

C = TypeVar("C")


class DocumentDecoder(ABC):
    """
    Abstract base class for turning raw server payloads into documents.

    Notes
    -----
    Subclasses must implement decode(). Bytes are expected to be UTF-8.
    """

    @abstractmethod
    def decode(self, data: str | bytes) -> Any:
        """
        Decode a single document.

        Parameters
        ----------
        data : str | bytes
            The raw document payload.

        Returns
        -------
        Any
            The decoded document.
        """
        ...


class DocumentEncoder(ABC):
    """
    Abstract base class for turning documents into raw payloads.
    """

    @abstractmethod
    def encode(self, document: Any) -> bytes:
        """
        Encode a single document.

        Parameters
        ----------
        document : Any
            A mapping, a Pydantic model, or any JSON-serializable object.

        Returns
        -------
        bytes
            The UTF-8 encoded payload.
        """
        ...


@runtime_checkable
class DecoderFactory(Protocol):
    """Protocol for objects that create document decoders."""

    def create(self) -> DocumentDecoder:
        ...


@runtime_checkable
class EncoderFactory(Protocol):
    """Protocol for objects that create document encoders."""

    def create(self) -> DocumentEncoder:
        ...


class CodecFactory(Generic[C]):
    """
    Factory creating a fresh codec instance of a fixed class on every call.

    Parameters
    ----------
    codec_class : type
        The decoder or encoder class to instantiate.
    **kwargs : Any
        Keyword arguments passed to the codec constructor.

    Examples
    --------
    >>> factory = CodecFactory(DefaultDocumentDecoder)
    >>> isinstance(factory.create(), DefaultDocumentDecoder)
    True
    """

    def __init__(self, codec_class: type[C], **kwargs: Any) -> None:
        self._codec_class = codec_class
        self._kwargs = kwargs

    @property
    def codec_class(self) -> type[C]:
        return self._codec_class

    def create(self) -> C:
        return self._codec_class(**self._kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._codec_class.__name__})"


def _to_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8")
    return data


class DefaultDocumentDecoder(DocumentDecoder):
    """
    Decoder parsing each payload eagerly into a dict.

    Parameters
    ----------
    model : type[BaseModel] | None, optional
        When given, each decoded document is validated into this Pydantic
        model instead of being returned as a dict.
    """

    FACTORY: CodecFactory[DefaultDocumentDecoder]

    def __init__(self, model: type[BaseModel] | None = None) -> None:
        self._model = model

    def decode(self, data: str | bytes) -> Any:
        text = _to_text(data)
        logger.debug(f"Decoding document: {text}")
        document = json.loads(text)
        if self._model is not None:
            return pydantic_parse(self._model, document)
        return document


class LazyDocument(Mapping[str, Any]):
    """
    Read-only mapping that keeps the raw payload until a field is read.

    Parsing happens at most once, on the first access to any key.
    """

    def __init__(self, raw: str | bytes) -> None:
        self._raw = raw
        self._document: dict[str, Any] | None = None

    @property
    def raw(self) -> str | bytes:
        return self._raw

    @property
    def is_decoded(self) -> bool:
        return self._document is not None

    def _decoded(self) -> dict[str, Any]:
        if self._document is None:
            self._document = json.loads(_to_text(self._raw))
        return self._document

    def __getitem__(self, key: str) -> Any:
        return self._decoded()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._decoded())

    def __len__(self) -> int:
        return len(self._decoded())

    def __repr__(self) -> str:
        if self._document is None:
            return f"LazyDocument(<{len(self._raw)} undecoded bytes>)"
        return f"LazyDocument({self._document!r})"


class LazyDocumentDecoder(DocumentDecoder):
    """Decoder deferring parsing until a field of the document is read."""

    FACTORY: CodecFactory[LazyDocumentDecoder]

    def decode(self, data: str | bytes) -> LazyDocument:
        return LazyDocument(data)


class DefaultDocumentEncoder(DocumentEncoder):
    """
    Encoder producing compact UTF-8 JSON.

    Pydantic models are serialized through their own JSON serializer so
    field aliases and custom encoders are respected.
    """

    FACTORY: CodecFactory[DefaultDocumentEncoder]

    def encode(self, document: Any) -> bytes:
        if isinstance(document, BaseModel):
            text = pydantic_serialize(document)
        elif isinstance(document, LazyDocument):
            text = _to_text(document.raw)
        else:
            text = json.dumps(document, separators=(",", ":"))
        return text.encode("utf-8")


DefaultDocumentDecoder.FACTORY = CodecFactory(DefaultDocumentDecoder)
LazyDocumentDecoder.FACTORY = CodecFactory(LazyDocumentDecoder)
DefaultDocumentEncoder.FACTORY = CodecFactory(DefaultDocumentEncoder)
