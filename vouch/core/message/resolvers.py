# vouch/core/message/resolvers.py
"""
Message resolvers: map a message key and a locale to a template.

Bundles are plain mappings of locale tag to ``{key: template}``; the tag
``default`` holds the root bundle. Lookup walks from the most specific tag
to the root: ``de_DE`` -> ``de`` -> ``default``.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

import yaml

from ...errors import ConfigError, MissingMessageError


logger = logging.getLogger(__name__)

ROOT_BUNDLE = "default"
DEFAULT_BUNDLE_RESOURCE = "messages.yaml"


class MessageResolver(Protocol):
    """Resolves message templates by key"""

    def resolve(self, key: str, locale: Any = None) -> str:
        """
        Resolve ``key`` for ``locale``.

        Raises:
            MissingMessageError: If the key is unknown to this resolver
        """
        ...


def locale_candidates(locale: Any) -> List[str]:
    """Lookup order for ``locale``, most specific first, ending with the root"""
    if locale is None:
        return [ROOT_BUNDLE]
    tag = str(locale).replace("-", "_")
    parts = tag.split("_")
    candidates = ["_".join(parts[:n]) for n in range(len(parts), 0, -1)]
    candidates.append(ROOT_BUNDLE)
    return candidates


class DictMessageResolver:
    """Resolves messages from in-memory bundles"""

    def __init__(self, bundles: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._bundles: Dict[str, Dict[str, str]] = {}
        for tag, messages in (bundles or {}).items():
            self.add_bundle(tag, messages)

    def add_bundle(self, tag: str, messages: Mapping[str, str]) -> None:
        bundle = self._bundles.setdefault(str(tag).replace("-", "_"), {})
        bundle.update({str(k): str(v) for k, v in messages.items()})

    def resolve(self, key: str, locale: Any = None) -> str:
        for tag in locale_candidates(locale):
            bundle = self._bundles.get(tag)
            if bundle is not None and key in bundle:
                return bundle[key]
        raise MissingMessageError.for_key(key, locale)

    def keys(self) -> List[str]:
        return sorted({key for bundle in self._bundles.values() for key in bundle})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bundles={sorted(self._bundles)})"


class YamlMessageResolver(DictMessageResolver):
    """
    Resolves messages from a YAML file.

    File layout:
    ```yaml
    default:
      constraint.not_null: "must not be null"
    de:
      constraint.not_null: "darf nicht leer sein"
    ```
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError.invalid(f"Cannot read message bundle: {self.path}", error=str(e)) from e
        super().__init__(_parse_bundles(text, str(self.path)))
        logger.debug("Loaded message bundle %s (%d keys)", self.path, len(self.keys()))

    @classmethod
    def from_string(cls, text: str) -> DictMessageResolver:
        return DictMessageResolver(_parse_bundles(text, "<string>"))


class MessageResolverChain:
    """Asks each resolver in turn; the first one that knows the key wins"""

    def __init__(self, *resolvers: MessageResolver):
        self.resolvers = tuple(resolvers)

    def resolve(self, key: str, locale: Any = None) -> str:
        for resolver in self.resolvers:
            try:
                return resolver.resolve(key, locale)
            except MissingMessageError:
                continue
        raise MissingMessageError.for_key(key, locale)

    def __repr__(self) -> str:
        return f"MessageResolverChain({', '.join(repr(r) for r in self.resolvers)})"


def _parse_bundles(text: str, source: str) -> Dict[str, Dict[str, str]]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError.invalid(f"Invalid message bundle YAML: {source}", error=str(e)) from e
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise ConfigError.invalid(
            f"Message bundle must map locale tags to key/template mappings: {source}"
        )
    return {str(tag): {str(k): str(v) for k, v in msgs.items()} for tag, msgs in data.items()}


def default_resolver() -> DictMessageResolver:
    """Resolver for the message bundle shipped with the package"""
    text = resources.files("vouch.resources").joinpath(DEFAULT_BUNDLE_RESOURCE).read_text(encoding="utf-8")
    return DictMessageResolver(_parse_bundles(text, DEFAULT_BUNDLE_RESOURCE))


def chain_resolvers(resolvers: Iterable[MessageResolver]) -> MessageResolverChain:
    """User resolvers first, the bundled defaults last"""
    return MessageResolverChain(*resolvers, default_resolver())


__all__ = [
    "MessageResolver",
    "DictMessageResolver",
    "YamlMessageResolver",
    "MessageResolverChain",
    "locale_candidates",
    "default_resolver",
    "chain_resolvers",
]
