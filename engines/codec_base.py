"""Common interface for all codecs and a name-based registry for the shell."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Type


class Codec(ABC):
    """
    Minimal interface shared by every codec.

    Codecs are stateless between calls: every `compress`/`decompress` builds its
    own tables and trees and drops them on return.
    """

    name: str = ''

    @abstractmethod
    def compress(self, data: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def decompress(self, artifact: Any) -> Any:
        raise NotImplementedError


_REGISTRY: Dict[str, Type[Codec]] = {}


def register_codec(cls: Type[Codec]) -> Type[Codec]:
    """Class decorator adding a codec to the registry under its `name`."""
    if not cls.name:
        raise ValueError(f"Codec {cls.__name__} has no name")
    _REGISTRY[cls.name] = cls
    return cls


def available_codecs() -> list:
    _load_builtin_codecs()
    return sorted(_REGISTRY)


def get_codec(name: str, **kwargs) -> Codec:
    """Instantiate a registered codec by name."""
    _load_builtin_codecs()
    try:
        cls = _REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown codec: {name} (expected one of {', '.join(sorted(_REGISTRY))})"
        ) from None
    return cls(**kwargs)


def _load_builtin_codecs():
    # Importing the modules runs their @register_codec decorators
    from engines import huffman_codec, text_huffman, lzw_codec, image_codec  # noqa: F401
